"""
Modelo KeyValueSlot: slot clave-valor donde vive el snapshot.

Hay un slot para el snapshot completo del consultorio y otro, independiente,
para la imagen de marca (logo en base64).
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from dentalflow.database import Base


class KeyValueSlot(Base):
    __tablename__ = "kv_slots"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<KeyValueSlot {self.key} ({len(self.value)} chars)>"
