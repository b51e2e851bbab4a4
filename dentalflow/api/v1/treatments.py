"""
Endpoints de tratamientos (consultas registradas).
"""

from fastapi import APIRouter, Depends

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.treatment import Treatment, TreatmentCreate
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Treatment])
async def list_treatments(store: RecordStore = Depends(get_store)):
    return store.get_treatments()


@router.post("", response_model=Treatment, status_code=201)
async def create_treatment(data: TreatmentCreate, store: RecordStore = Depends(get_store)):
    """Registra un tratamiento. Los planificados no suman a la deuda."""
    return await store.add_treatment(data)
