"""
Schemas para Payment: abonos del paciente.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from dentalflow.models.enums import PaymentMethod, PaymentStatus
from dentalflow.schemas.common import Timestamp


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentCreate(BaseModel):
    patient_id: UUID
    amount: Decimal = Field(..., ge=0)
    method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = Field(None, max_length=500)
    date: Timestamp = Field(default_factory=_now)


class Payment(BaseModel):
    id: UUID
    patient_id: UUID
    patient_name: str
    amount: Decimal = Field(..., ge=0)
    method: PaymentMethod
    notes: str | None = None
    date: Timestamp
    status: PaymentStatus = PaymentStatus.COMPLETED
