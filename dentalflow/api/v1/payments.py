"""
Endpoints de pagos: registro y anulación.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.payment import Payment, PaymentCreate
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("", response_model=list[Payment])
async def list_payments(store: RecordStore = Depends(get_store)):
    return store.get_payments()


@router.post("", response_model=Payment, status_code=201)
async def create_payment(data: PaymentCreate, store: RecordStore = Depends(get_store)):
    return await store.add_payment(data)


@router.post("/{payment_id}/cancel", response_model=Payment)
async def cancel_payment(payment_id: UUID, store: RecordStore = Depends(get_store)):
    """
    Anula un pago. Queda visible en el historial pero la deuda del
    paciente vuelve a incluir su monto.
    """
    return await store.cancel_payment(payment_id)
