"""
Schemas para la Atención Integral: tratamiento + abono + próxima cita
registrados como una sola operación.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from dentalflow.models.enums import (
    AppointmentType,
    PaymentMethod,
    TreatmentStatus,
)
from dentalflow.schemas.appointment import Appointment
from dentalflow.schemas.common import Timestamp
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.treatment import ToothDraft, Treatment


def _now() -> datetime:
    return datetime.now(timezone.utc)


class VisitTreatmentDraft(BaseModel):
    procedure: str = Field(..., max_length=200)
    description: str = Field("", max_length=2000)
    cost: Decimal | None = Field(
        None, ge=0,
        description="Si se omite: precio del tarifario + piezas del odontograma",
    )
    status: TreatmentStatus = TreatmentStatus.COMPLETED
    date: Timestamp = Field(default_factory=_now)
    teeth: list[ToothDraft] = Field(default_factory=list)

    @field_validator("teeth")
    @classmethod
    def unique_teeth(cls, v: list[ToothDraft]) -> list[ToothDraft]:
        numbers = [t.number for t in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Cada pieza puede aparecer una sola vez")
        return v


class VisitPaymentDraft(BaseModel):
    amount: Decimal = Field(Decimal("0"), ge=0)
    method: PaymentMethod = PaymentMethod.CASH


class VisitAppointmentDraft(BaseModel):
    date: Timestamp
    type: AppointmentType = AppointmentType.TREATMENT
    notes: str | None = Field(None, max_length=2000)


class IntegralVisitCreate(BaseModel):
    patient_id: UUID
    treatment: VisitTreatmentDraft
    payment: VisitPaymentDraft | None = None
    next_appointment: VisitAppointmentDraft | None = None


class IntegralVisitResult(BaseModel):
    treatment: Treatment
    payment: Payment | None = None
    appointment: Appointment | None = None
