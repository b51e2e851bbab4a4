"""
Endpoint de Atención Integral.
"""

from fastapi import APIRouter, Depends

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.visit import IntegralVisitCreate, IntegralVisitResult
from dentalflow.services import visit_service
from dentalflow.store import RecordStore

router = APIRouter()


@router.post("", response_model=IntegralVisitResult, status_code=201)
async def record_integral_visit(
    data: IntegralVisitCreate,
    store: RecordStore = Depends(get_store),
):
    """
    Registra tratamiento, abono y próxima cita en una sola operación.
    Si algo falla no se guarda ninguno de los tres.
    """
    return await visit_service.record_integral_visit(store, data)
