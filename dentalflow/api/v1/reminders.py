"""
Endpoints de recordatorios del equipo.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.user import Reminder, ReminderCreate
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Reminder])
async def list_reminders(store: RecordStore = Depends(get_store)):
    return store.get_reminders()


@router.post("", response_model=Reminder, status_code=201)
async def create_reminder(data: ReminderCreate, store: RecordStore = Depends(get_store)):
    return await store.add_reminder(data.text, data.user_id)


@router.post("/{reminder_id}/toggle", response_model=Reminder)
async def toggle_reminder(reminder_id: UUID, store: RecordStore = Depends(get_store)):
    """Marca o desmarca el recordatorio como completado."""
    return await store.toggle_reminder(reminder_id)


@router.delete("/{reminder_id}", status_code=204)
async def delete_reminder(reminder_id: UUID, store: RecordStore = Depends(get_store)):
    await store.delete_reminder(reminder_id)
