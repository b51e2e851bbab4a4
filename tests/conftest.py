"""
Fixtures compartidas para Pytest.
Configura el store de test, la base SQLite temporal y el cliente HTTP.
"""

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from dentalflow.api.dependencies import get_store
from dentalflow.core.exceptions import PersistenceException
from dentalflow.database import create_tables
from dentalflow.main import app
from dentalflow.models.enums import TreatmentStatus
from dentalflow.persistence import InMemorySnapshotBackend, SqlSnapshotBackend
from dentalflow.schemas.patient import Patient, PatientCreate
from dentalflow.schemas.payment import PaymentCreate
from dentalflow.schemas.snapshot import Snapshot
from dentalflow.schemas.treatment import TreatmentCreate
from dentalflow.store import RecordStore


class FlakyBackend(InMemorySnapshotBackend):
    """Backend en memoria que cuenta escrituras y puede fallar a pedido."""

    def __init__(self) -> None:
        super().__init__()
        self.fail = False
        self.saves = 0

    async def save_snapshot(self, snapshot: Snapshot) -> None:
        if self.fail:
            raise PersistenceException()
        self.saves += 1
        await super().save_snapshot(snapshot)


# ── Base SQLite temporal ─────────────────────────────


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def sql_backend(session_factory) -> SqlSnapshotBackend:
    return SqlSnapshotBackend(session_factory, encryption_key="")


# ── Store ────────────────────────────────────────────


@pytest_asyncio.fixture
async def backend() -> FlakyBackend:
    return FlakyBackend()


@pytest_asyncio.fixture
async def store(backend: FlakyBackend) -> RecordStore:
    """Store vacío (solo tarifario y motivos por defecto)."""
    record_store = RecordStore(backend)
    await record_store.load(seed_demo=False)
    return record_store


@pytest_asyncio.fixture
async def patient(store: RecordStore) -> Patient:
    return await store.add_patient(
        PatientCreate(first_name="Juan", last_name="Pérez", dni="8493021 LP")
    )


@pytest_asyncio.fixture
async def other_patient(store: RecordStore) -> Patient:
    return await store.add_patient(
        PatientCreate(first_name="Sofia", last_name="Mendoza", dni="7483920 TJ")
    )


@pytest_asyncio.fixture
async def charge(store: RecordStore):
    """Registra un tratamiento (cargo) para un paciente."""

    async def _charge(patient: Patient, cost: str,
                      status: TreatmentStatus = TreatmentStatus.COMPLETED, **kwargs):
        return await store.add_treatment(TreatmentCreate(
            patient_id=patient.id,
            procedure=kwargs.pop("procedure", "Curación"),
            cost=Decimal(cost),
            status=status,
            **kwargs,
        ))

    return _charge


@pytest_asyncio.fixture
async def pay(store: RecordStore):
    """Registra un abono para un paciente."""

    async def _pay(patient: Patient, amount: str, **kwargs):
        return await store.add_payment(
            PaymentCreate(patient_id=patient.id, amount=Decimal(amount), **kwargs)
        )

    return _pay


# ── Cliente HTTP ─────────────────────────────────────


@pytest_asyncio.fixture
async def client(store: RecordStore) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP de test que usa el store de test."""
    app.dependency_overrides[get_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
