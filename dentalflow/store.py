"""
RecordStore: colecciones del consultorio en memoria, persistidas como un
snapshot completo después de cada escritura.

Lecturas: síncronas, devuelven copias (nunca referencias internas).
Escrituras: corrutinas serializadas por un lock. Cada una trabaja sobre una
copia del estado, la persiste y recién entonces la publica; si el backend
falla, el estado en memoria queda en su último valor válido.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ValidationError

from dentalflow.config import get_settings
from dentalflow.core.exceptions import (
    ConflictException,
    NotFoundException,
    ValidationException,
)
from dentalflow.core.security import hash_password, verify_password
from dentalflow.models.enums import VALID_TRANSITIONS, AppointmentStatus, PaymentStatus
from dentalflow.persistence import SnapshotBackend
from dentalflow.schemas.appointment import Appointment, AppointmentCreate
from dentalflow.schemas.catalog import ProcedureCreate, ProcedureItem
from dentalflow.schemas.common import local_zone
from dentalflow.schemas.patient import Patient, PatientCreate, PatientUpdate
from dentalflow.schemas.payment import Payment, PaymentCreate
from dentalflow.schemas.snapshot import Snapshot
from dentalflow.schemas.treatment import ToothRecord, Treatment, TreatmentCreate
from dentalflow.schemas.user import Reminder, User, UserCreate, UserUpdate
from dentalflow.seed import demo_records

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _copies(items: list[M]) -> list[M]:
    return [item.model_copy(deep=True) for item in items]


def _find(items: list[M], item_id: UUID, resource: str) -> M:
    for item in items:
        if item.id == item_id:
            return item
    raise NotFoundException(resource)


def require_patient(state: Snapshot, patient_id: UUID) -> Patient:
    """Paciente dentro de un estado (o borrador); NotFound si no existe."""
    return _find(state.patients, patient_id, "Paciente")


class RecordStore:
    def __init__(self, backend: SnapshotBackend) -> None:
        self.backend = backend
        self._state = Snapshot()
        self._lock = asyncio.Lock()

    # ── Carga ────────────────────────────────────────

    async def load(self, *, seed_demo: bool | None = None) -> None:
        """
        Recarga el snapshot guardado. Si el slot está vacío arranca con el
        tarifario por defecto (y datos demo si corresponde) y lo persiste.
        """
        snapshot = await self.backend.load_snapshot()
        if snapshot is None:
            if seed_demo is None:
                seed_demo = get_settings().SEED_DEMO_DATA
            snapshot = Snapshot(**demo_records()) if seed_demo else Snapshot()
            await self.backend.save_snapshot(snapshot)
            logger.info(f"Snapshot inicial creado (demo={seed_demo})")
        else:
            logger.info(
                f"Snapshot cargado: {len(snapshot.patients)} pacientes, "
                f"{len(snapshot.treatments)} tratamientos, {len(snapshot.payments)} pagos"
            )
        self._state = snapshot

    def snapshot(self) -> Snapshot:
        return self._state.model_copy(deep=True)

    # ── Escritura atómica ────────────────────────────

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Snapshot]:
        """
        Unidad de escritura. El bloque modifica un borrador del estado; al
        salir sin error se persiste una sola vez y se publica. Si el bloque
        no cambió nada no se escribe.
        """
        async with self._lock:
            draft = self._state.model_copy(deep=True)
            yield draft
            if draft == self._state:
                return
            await self.backend.save_snapshot(draft)
            self._state = draft

    # ── Pacientes ────────────────────────────────────

    def get_patients(self) -> list[Patient]:
        return _copies(self._state.patients)

    def get_patient(self, patient_id: UUID) -> Patient:
        return require_patient(self._state, patient_id).model_copy(deep=True)

    def search_patients(self, query: str, limit: int | None = None) -> list[Patient]:
        """Busca por nombre, apellido o carnet (sin distinguir mayúsculas)."""
        limit = limit or get_settings().SEARCH_RESULTS_LIMIT
        q = query.strip().lower()
        if not q:
            return []
        matches = [
            p for p in self._state.patients
            if q in p.first_name.lower()
            or q in p.last_name.lower()
            or q in p.dni.lower()
        ]
        return _copies(matches[:limit])

    async def add_patient(self, data: PatientCreate) -> Patient:
        patient = Patient(
            id=uuid4(),
            created_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        async with self.transaction() as state:
            state.patients.insert(0, patient)
        return patient.model_copy(deep=True)

    async def update_patient(self, patient_id: UUID, data: PatientUpdate) -> Patient:
        """
        Actualiza solo los campos enviados. El nombre desnormalizado en
        tratamientos, pagos y citas ya registrados no se modifica.
        """
        changes = data.model_dump(exclude_unset=True)
        async with self.transaction() as state:
            current = require_patient(state, patient_id)
            try:
                updated = Patient.model_validate(
                    {**current.model_dump(), **changes, "id": current.id,
                     "created_at": current.created_at}
                )
            except ValidationError as e:
                raise ValidationException(str(e))
            index = state.patients.index(current)
            state.patients[index] = updated
        return updated.model_copy(deep=True)

    # ── Tratamientos ─────────────────────────────────

    def get_treatments(self) -> list[Treatment]:
        return _copies(sorted(self._state.treatments, key=lambda t: t.date, reverse=True))

    def get_treatments_by_patient(self, patient_id: UUID) -> list[Treatment]:
        own = [t for t in self._state.treatments if t.patient_id == patient_id]
        return _copies(sorted(own, key=lambda t: t.date, reverse=True))

    async def add_treatment(
        self, data: TreatmentCreate, teeth: list[ToothRecord] | None = None
    ) -> Treatment:
        async with self.transaction() as state:
            patient = require_patient(state, data.patient_id)
            treatment = Treatment(
                id=uuid4(),
                patient_name=patient.full_name,
                teeth=teeth or [],
                **data.model_dump(),
            )
            state.treatments.insert(0, treatment)
        return treatment.model_copy(deep=True)

    # ── Pagos ────────────────────────────────────────

    def get_payments(self) -> list[Payment]:
        return _copies(sorted(self._state.payments, key=lambda p: p.date, reverse=True))

    def get_payments_by_patient(self, patient_id: UUID) -> list[Payment]:
        own = [p for p in self._state.payments if p.patient_id == patient_id]
        return _copies(sorted(own, key=lambda p: p.date, reverse=True))

    def get_payment(self, payment_id: UUID) -> Payment:
        return _find(self._state.payments, payment_id, "Pago").model_copy(deep=True)

    async def add_payment(self, data: PaymentCreate) -> Payment:
        async with self.transaction() as state:
            patient = require_patient(state, data.patient_id)
            payment = Payment(
                id=uuid4(),
                patient_name=patient.full_name,
                status=PaymentStatus.COMPLETED,
                **data.model_dump(),
            )
            state.payments.insert(0, payment)
        return payment.model_copy(deep=True)

    async def cancel_payment(self, payment_id: UUID) -> Payment:
        """
        Anula un pago (completed → cancelled). El pago sigue en el historial
        pero deja de contar en el ledger. Anular uno ya anulado no hace nada.
        """
        async with self.transaction() as state:
            payment = _find(state.payments, payment_id, "Pago")
            if payment.status == PaymentStatus.CANCELLED:
                logger.warning(f"Pago {payment_id} ya estaba anulado, se ignora")
            else:
                payment.status = PaymentStatus.CANCELLED
                logger.info(
                    f"Pago anulado: {payment_id} ({payment.amount}) de {payment.patient_name}"
                )
        return payment.model_copy(deep=True)

    # ── Citas ────────────────────────────────────────

    def get_appointments(self, day: date | None = None) -> list[Appointment]:
        """Citas en orden cronológico; `day` filtra por fecha local."""
        items = self._state.appointments
        if day is not None:
            zone = local_zone()
            items = [a for a in items if a.date.astimezone(zone).date() == day]
        return _copies(sorted(items, key=lambda a: a.date))

    async def add_appointment(self, data: AppointmentCreate) -> Appointment:
        async with self.transaction() as state:
            patient = require_patient(state, data.patient_id)
            appointment = Appointment(
                id=uuid4(),
                patient_name=patient.full_name,
                status=AppointmentStatus.PENDING,
                **data.model_dump(),
            )
            state.appointments.append(appointment)
        return appointment.model_copy(deep=True)

    async def update_appointment_status(
        self, appointment_id: UUID, new_status: AppointmentStatus
    ) -> Appointment:
        async with self.transaction() as state:
            appointment = _find(state.appointments, appointment_id, "Cita")
            if appointment.status != new_status:
                allowed = VALID_TRANSITIONS.get(appointment.status, [])
                if new_status not in allowed:
                    raise ValidationException(
                        f"No se puede cambiar una cita de '{appointment.status.value}' "
                        f"a '{new_status.value}'"
                    )
                appointment.status = new_status
        return appointment.model_copy(deep=True)

    # ── Usuarios ─────────────────────────────────────

    def get_users(self) -> list[User]:
        return _copies(self._state.users)

    def get_user(self, user_id: UUID) -> User:
        return _find(self._state.users, user_id, "Usuario").model_copy(deep=True)

    async def add_user(self, data: UserCreate) -> User:
        user = User(
            id=uuid4(),
            username=data.username,
            name=data.name,
            role=data.role,
            hashed_password=hash_password(data.password),
            last_access=datetime.now(timezone.utc),
        )
        async with self.transaction() as state:
            if any(u.username.lower() == data.username.lower() for u in state.users):
                raise ConflictException("Ya existe un usuario con ese nombre de usuario")
            state.users.append(user)
        logger.info(f"Usuario creado: {user.username} ({user.role.value})")
        return user.model_copy(deep=True)

    async def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        changes = data.model_dump(exclude_unset=True, exclude={"password"})
        if data.password:
            changes["hashed_password"] = hash_password(data.password)
        async with self.transaction() as state:
            user = _find(state.users, user_id, "Usuario")
            for field, value in changes.items():
                if value is not None:
                    setattr(user, field, value)
        return user.model_copy(deep=True)

    async def delete_user(self, user_id: UUID) -> None:
        async with self.transaction() as state:
            user = _find(state.users, user_id, "Usuario")
            state.users.remove(user)
        logger.info(f"Usuario eliminado: {user.username}")

    async def authenticate(self, username: str, password: str) -> User | None:
        """Verifica credenciales y registra el último acceso."""
        async with self.transaction() as state:
            user = next((u for u in state.users if u.username == username), None)
            if user is None or not verify_password(password, user.hashed_password):
                logger.warning(f"Login fallido para username={username}")
                return None
            user.last_access = datetime.now(timezone.utc)
        return user.model_copy(deep=True)

    # ── Recordatorios ────────────────────────────────

    def get_reminders(self) -> list[Reminder]:
        return _copies(self._state.reminders)

    async def add_reminder(self, text: str, user_id: UUID) -> Reminder:
        async with self.transaction() as state:
            author = _find(state.users, user_id, "Usuario")
            reminder = Reminder(
                id=uuid4(),
                text=text,
                created_at=datetime.now(timezone.utc),
                created_by=author.name,
                created_by_id=author.id,
            )
            state.reminders.insert(0, reminder)
        return reminder.model_copy(deep=True)

    async def toggle_reminder(self, reminder_id: UUID) -> Reminder:
        async with self.transaction() as state:
            reminder = _find(state.reminders, reminder_id, "Recordatorio")
            reminder.completed = not reminder.completed
        return reminder.model_copy(deep=True)

    async def delete_reminder(self, reminder_id: UUID) -> None:
        async with self.transaction() as state:
            state.reminders.remove(_find(state.reminders, reminder_id, "Recordatorio"))

    # ── Tarifario y motivos ──────────────────────────

    def get_procedures(self) -> list[ProcedureItem]:
        return _copies(self._state.procedures)

    def find_procedure_price(self, name: str) -> Decimal | None:
        for item in self._state.procedures:
            if item.name == name:
                return item.price
        return None

    async def add_procedure(self, data: ProcedureCreate) -> ProcedureItem:
        item = ProcedureItem(id=uuid4(), **data.model_dump())
        async with self.transaction() as state:
            state.procedures.append(item)
        return item.model_copy(deep=True)

    async def remove_procedure(self, procedure_id: UUID) -> None:
        async with self.transaction() as state:
            state.procedures.remove(_find(state.procedures, procedure_id, "Procedimiento"))

    def get_consultation_reasons(self) -> list[str]:
        return list(self._state.consultation_reasons)

    async def add_consultation_reason(self, reason: str) -> list[str]:
        async with self.transaction() as state:
            if reason not in state.consultation_reasons:
                state.consultation_reasons.append(reason)
        return list(state.consultation_reasons)

    async def remove_consultation_reason(self, reason: str) -> list[str]:
        async with self.transaction() as state:
            state.consultation_reasons = [
                r for r in state.consultation_reasons if r != reason
            ]
        return list(state.consultation_reasons)

    # ── Meta financiera ──────────────────────────────

    def get_financial_goal(self) -> Decimal:
        return self._state.financial_goal

    async def set_financial_goal(self, amount: Decimal) -> Decimal:
        async with self.transaction() as state:
            state.financial_goal = amount
        return amount

    # ── Logo (slot independiente) ────────────────────

    async def get_logo(self) -> str | None:
        return await self.backend.load_logo()

    async def save_logo(self, image: str) -> None:
        await self.backend.save_logo(image)
