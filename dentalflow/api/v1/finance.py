"""
Endpoints financieros: deudores, ingresos por periodo y meta mensual.
"""

from fastapi import APIRouter, Depends, Query

from dentalflow.api.dependencies import get_store
from dentalflow.models.enums import IncomeWindow
from dentalflow.schemas.catalog import FinancialGoal
from dentalflow.schemas.report import DebtorEntry, IncomeResponse
from dentalflow.services import ledger_service, report_service
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("/debtors", response_model=list[DebtorEntry])
async def list_debtors(store: RecordStore = Depends(get_store)):
    """Pacientes con deuda pendiente, de mayor a menor."""
    return ledger_service.list_debtors(store)


@router.get("/income", response_model=IncomeResponse)
async def get_income(
    window: IncomeWindow = Query(IncomeWindow.MONTH),
    store: RecordStore = Depends(get_store),
):
    total = report_service.income_in_window(store, window)
    return IncomeResponse(window=window.value, total=total)


@router.get("/goal", response_model=FinancialGoal)
async def get_financial_goal(store: RecordStore = Depends(get_store)):
    return FinancialGoal(amount=store.get_financial_goal())


@router.put("/goal", response_model=FinancialGoal)
async def set_financial_goal(data: FinancialGoal, store: RecordStore = Depends(get_store)):
    return FinancialGoal(amount=await store.set_financial_goal(data.amount))
