"""
Endpoints de pacientes: ficha, búsqueda e historial por paciente.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.patient import Patient, PatientCreate, PatientUpdate
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.report import PatientBalance
from dentalflow.schemas.treatment import Treatment
from dentalflow.services import ledger_service
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Patient])
async def list_patients(store: RecordStore = Depends(get_store)):
    """Lista todos los pacientes, los más recientes primero."""
    return store.get_patients()


@router.get("/search", response_model=list[Patient])
async def search_patients(
    q: str = Query(..., min_length=1, description="Nombre, apellido o carnet"),
    limit: int | None = Query(None, ge=1, le=100),
    store: RecordStore = Depends(get_store),
):
    return store.search_patients(q, limit=limit)


@router.get("/{patient_id}", response_model=Patient)
async def get_patient(patient_id: UUID, store: RecordStore = Depends(get_store)):
    return store.get_patient(patient_id)


@router.post("", response_model=Patient, status_code=201)
async def create_patient(data: PatientCreate, store: RecordStore = Depends(get_store)):
    return await store.add_patient(data)


@router.put("/{patient_id}", response_model=Patient)
async def update_patient(
    patient_id: UUID,
    data: PatientUpdate,
    store: RecordStore = Depends(get_store),
):
    """
    Actualiza un paciente existente.
    Solo se actualizan los campos enviados.
    """
    return await store.update_patient(patient_id, data)


@router.get("/{patient_id}/treatments", response_model=list[Treatment])
async def list_patient_treatments(patient_id: UUID, store: RecordStore = Depends(get_store)):
    """Historia de tratamientos, la más reciente primero."""
    store.get_patient(patient_id)
    return store.get_treatments_by_patient(patient_id)


@router.get("/{patient_id}/payments", response_model=list[Payment])
async def list_patient_payments(patient_id: UUID, store: RecordStore = Depends(get_store)):
    """Pagos del paciente, incluidos los anulados."""
    store.get_patient(patient_id)
    return store.get_payments_by_patient(patient_id)


@router.get("/{patient_id}/balance", response_model=PatientBalance)
async def get_patient_balance(patient_id: UUID, store: RecordStore = Depends(get_store)):
    """Total cobrado, total pagado y deuda actual."""
    return ledger_service.compute_balance(store, patient_id)
