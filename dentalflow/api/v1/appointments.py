"""
Endpoints de la agenda.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.appointment import (
    Appointment,
    AppointmentCreate,
    AppointmentStatusUpdate,
)
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Appointment])
async def list_appointments(
    day: date | None = Query(None, description="Solo las citas de esta fecha"),
    store: RecordStore = Depends(get_store),
):
    """Citas en orden cronológico."""
    return store.get_appointments(day=day)


@router.post("", response_model=Appointment, status_code=201)
async def create_appointment(data: AppointmentCreate, store: RecordStore = Depends(get_store)):
    return await store.add_appointment(data)


@router.patch("/{appointment_id}/status", response_model=Appointment)
async def update_appointment_status(
    appointment_id: UUID,
    data: AppointmentStatusUpdate,
    store: RecordStore = Depends(get_store),
):
    """Pendiente → Completada o Cancelada. Los estados finales no cambian."""
    return await store.update_appointment_status(appointment_id, data.status)
