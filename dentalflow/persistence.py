"""
Persistencia del snapshot en slots clave-valor.

El store solo conoce `SnapshotBackend`: cargar/guardar el snapshot completo
y, por separado, el logo. Cada escritura reemplaza el valor anterior.
"""

import logging
from abc import ABC, abstractmethod

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dentalflow.config import get_settings
from dentalflow.core.exceptions import PersistenceException
from dentalflow.core.security import decrypt_blob, encrypt_blob
from dentalflow.models.kv_slot import KeyValueSlot
from dentalflow.schemas.snapshot import Snapshot

logger = logging.getLogger(__name__)


def _decode_snapshot(raw: str) -> Snapshot:
    try:
        return Snapshot.model_validate_json(raw)
    except ValidationError as e:
        logger.error(f"Snapshot ilegible: {e.error_count()} errores de validación")
        raise PersistenceException("El snapshot almacenado está dañado")


class SnapshotBackend(ABC):
    """Colaborador de persistencia del store."""

    @abstractmethod
    async def load_snapshot(self) -> Snapshot | None:
        """Devuelve el último snapshot guardado, o None si el slot está vacío."""

    @abstractmethod
    async def save_snapshot(self, snapshot: Snapshot) -> None:
        """Sobrescribe el snapshot guardado."""

    @abstractmethod
    async def load_logo(self) -> str | None:
        ...

    @abstractmethod
    async def save_logo(self, image: str) -> None:
        ...


class InMemorySnapshotBackend(SnapshotBackend):
    """Slots en un dict. Guarda JSON, igual que el backend SQL."""

    def __init__(self) -> None:
        self.slots: dict[str, str] = {}

    async def load_snapshot(self) -> Snapshot | None:
        raw = self.slots.get("snapshot")
        return _decode_snapshot(raw) if raw is not None else None

    async def save_snapshot(self, snapshot: Snapshot) -> None:
        self.slots["snapshot"] = snapshot.model_dump_json()

    async def load_logo(self) -> str | None:
        return self.slots.get("logo")

    async def save_logo(self, image: str) -> None:
        self.slots["logo"] = image


class SqlSnapshotBackend(SnapshotBackend):
    """
    Slots en la tabla `kv_slots` vía SQLAlchemy async.
    Si hay clave de cifrado, el snapshot se guarda cifrado con Fernet.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        snapshot_key: str | None = None,
        logo_key: str | None = None,
        encryption_key: str | None = None,
    ) -> None:
        settings = get_settings()
        self.session_factory = session_factory
        self.snapshot_key = snapshot_key or settings.SNAPSHOT_KEY
        self.logo_key = logo_key or settings.LOGO_KEY
        self.encryption_key = (
            encryption_key if encryption_key is not None
            else settings.SNAPSHOT_ENCRYPTION_KEY
        )

    async def _read_slot(self, key: str) -> str | None:
        try:
            async with self.session_factory() as session:
                slot = await session.get(KeyValueSlot, key)
                return slot.value if slot else None
        except SQLAlchemyError as e:
            logger.error(f"Error leyendo slot '{key}': {e}")
            raise PersistenceException("No se pudo leer la información guardada")

    async def _write_slot(self, key: str, value: str) -> None:
        try:
            async with self.session_factory() as session:
                slot = await session.get(KeyValueSlot, key)
                if slot is None:
                    session.add(KeyValueSlot(key=key, value=value))
                else:
                    slot.value = value
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error escribiendo slot '{key}': {e}")
            raise PersistenceException()

    async def load_snapshot(self) -> Snapshot | None:
        raw = await self._read_slot(self.snapshot_key)
        if raw is None:
            return None
        if self.encryption_key:
            raw = decrypt_blob(raw, self.encryption_key)
        return _decode_snapshot(raw)

    async def save_snapshot(self, snapshot: Snapshot) -> None:
        raw = snapshot.model_dump_json()
        if self.encryption_key:
            raw = encrypt_blob(raw, self.encryption_key)
        await self._write_slot(self.snapshot_key, raw)

    async def load_logo(self) -> str | None:
        return await self._read_slot(self.logo_key)

    async def save_logo(self, image: str) -> None:
        await self._write_slot(self.logo_key, image)
