"""
Schemas de configuración del consultorio: tarifario, motivos de consulta,
meta financiera y logo.
"""

import base64
import binascii
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class ProcedureCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: Decimal = Field(..., ge=0)


class ProcedureItem(ProcedureCreate):
    id: UUID


class ReasonCreate(BaseModel):
    reason: str = Field(..., min_length=1, max_length=200)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("El motivo no puede estar vacío")
        return cleaned


class FinancialGoal(BaseModel):
    amount: Decimal = Field(..., ge=0)


class Logo(BaseModel):
    """Imagen en base64, con o sin prefijo data URL."""
    image: str = Field(..., min_length=1)

    @field_validator("image")
    @classmethod
    def validate_base64(cls, v: str) -> str:
        payload = v.split(",", 1)[1] if v.startswith("data:") else v
        try:
            base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("La imagen no es base64 válido")
        return v
