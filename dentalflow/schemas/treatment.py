"""
Schemas para Treatment: cargos clínicos del paciente.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from dentalflow.models.enums import TOOTH_PRICES, ToothCondition, TreatmentStatus
from dentalflow.schemas.common import Timestamp

# Dientes válidos FDI: adultos (11-18, 21-28, 31-38, 41-48)
# y deciduos (51-55, 61-65, 71-75, 81-85)
VALID_ADULT_TEETH = set(
    list(range(11, 19)) + list(range(21, 29)) +
    list(range(31, 39)) + list(range(41, 49))
)
VALID_DECIDUOUS_TEETH = set(
    list(range(51, 56)) + list(range(61, 66)) +
    list(range(71, 76)) + list(range(81, 86))
)
VALID_TEETH = VALID_ADULT_TEETH | VALID_DECIDUOUS_TEETH


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ToothDraft(BaseModel):
    """
    Pieza del odontograma tocada en una visita, tal como llega en la solicitud.
    El precio no se acepta: sale de la condición (ver `priced`).
    """
    model_config = {"extra": "forbid"}

    number: int = Field(..., description="Número FDI del diente")
    condition: ToothCondition = ToothCondition.HEALTHY
    notes: str = Field("", max_length=500)

    @field_validator("number")
    @classmethod
    def validate_tooth(cls, v: int) -> int:
        if v not in VALID_TEETH:
            raise ValueError(
                f"Número de diente FDI inválido: {v}. "
                "Adultos: 11-18, 21-28, 31-38, 41-48. "
                "Deciduos: 51-55, 61-65, 71-75, 81-85."
            )
        return v

    def priced(self) -> "ToothRecord":
        """Pieza con el precio de referencia de su condición."""
        return ToothRecord(**self.model_dump(exclude={"price"}), price=TOOTH_PRICES[self.condition])

    @property
    def label(self) -> str:
        return f"{self.number}({self.condition.value})"


class ToothRecord(ToothDraft):
    """Pieza registrada en el tratamiento, con su precio de referencia."""
    model_config = {"extra": "ignore"}

    price: Decimal = Field(Decimal("0"), ge=0)


class TreatmentBase(BaseModel):
    procedure: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    cost: Decimal = Field(..., ge=0)
    status: TreatmentStatus = TreatmentStatus.COMPLETED
    date: Timestamp = Field(default_factory=_now)

    @field_validator("procedure")
    @classmethod
    def validate_procedure(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("El procedimiento no puede estar vacío")
        return cleaned


class TreatmentCreate(TreatmentBase):
    patient_id: UUID


class Treatment(TreatmentBase):
    id: UUID
    patient_id: UUID
    patient_name: str
    teeth: list[ToothRecord] = Field(default_factory=list)
