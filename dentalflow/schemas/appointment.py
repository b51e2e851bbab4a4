"""
Schemas para Appointment.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from dentalflow.models.enums import AppointmentStatus, AppointmentType
from dentalflow.schemas.common import Timestamp


class AppointmentCreate(BaseModel):
    patient_id: UUID
    date: Timestamp
    type: AppointmentType = AppointmentType.CONSULTATION
    notes: str | None = Field(None, max_length=2000)


class AppointmentStatusUpdate(BaseModel):
    status: AppointmentStatus


class Appointment(BaseModel):
    id: UUID
    patient_id: UUID
    patient_name: str
    date: Timestamp
    type: AppointmentType
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: str | None = None
