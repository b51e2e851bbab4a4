"""
Endpoints del panel principal.
"""

from fastapi import APIRouter, Depends, Query

from dentalflow.api.dependencies import get_store
from dentalflow.schemas.report import DailyIncome, DashboardStats, RecentTreatedEntry
from dentalflow.services import report_service
from dentalflow.store import RecordStore

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(store: RecordStore = Depends(get_store)):
    return report_service.dashboard_stats(store)


@router.get("/daily-income", response_model=list[DailyIncome])
async def get_daily_income(
    days: int = Query(7, ge=1, le=31),
    store: RecordStore = Depends(get_store),
):
    """Ingresos por día de la última semana (o de los últimos `days` días)."""
    return report_service.daily_income_stats(store, days=days)


@router.get("/recent-treated", response_model=list[RecentTreatedEntry])
async def get_recent_treated(
    limit: int | None = Query(None, ge=1, le=50),
    store: RecordStore = Depends(get_store),
):
    return report_service.recent_treated_patients(store, limit=limit)
