"""
Servicio de reportes: pacientes atendidos recientemente, ingresos por
período y KPIs del dashboard.

Los períodos son calendario (día, mes o año en curso en la zona del
consultorio), no ventanas móviles. Cada límite lleva el offset que le
corresponde en esa zona, también cuando el período cruza un cambio de horario.
"""

from datetime import date, datetime, time, timedelta, tzinfo
from decimal import Decimal
from uuid import UUID

from dateutil.relativedelta import relativedelta

from dentalflow.config import get_settings
from dentalflow.models.enums import IncomeWindow, PaymentStatus
from dentalflow.schemas.common import local_zone
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.report import (
    DailyIncome,
    DashboardStats,
    RecentTreatedEntry,
)
from dentalflow.store import RecordStore

WEEKDAY_NAMES = ["Lun", "Mar", "Mie", "Jue", "Vie", "Sab", "Dom"]


def _local_now(now: datetime | None, zone: tzinfo) -> datetime:
    """`now` expresado en `zone`; sin zona se toma como hora del consultorio."""
    if now is None:
        return datetime.now(zone)
    if now.tzinfo is None:
        now = now.replace(tzinfo=zone)
    return now.astimezone(zone)


def _midnight(day: date, zone: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=zone)


def window_bounds(
    window: IncomeWindow,
    now: datetime | None = None,
    zone: tzinfo | None = None,
) -> tuple[datetime, datetime]:
    """Inicio (inclusive) y fin (exclusivo) del período que contiene `now`."""
    zone = zone or local_zone()
    today = _local_now(now, zone).date()
    if window == IncomeWindow.DAY:
        start_day, end_day = today, today + timedelta(days=1)
    elif window == IncomeWindow.MONTH:
        start_day = today.replace(day=1)
        end_day = start_day + relativedelta(months=1)
    else:
        start_day = today.replace(month=1, day=1)
        end_day = start_day + relativedelta(years=1)
    return _midnight(start_day, zone), _midnight(end_day, zone)


def _income_between(payments: list[Payment], start: datetime, end: datetime) -> Decimal:
    return sum(
        (p.amount for p in payments
         if p.status != PaymentStatus.CANCELLED and start <= p.date < end),
        Decimal("0"),
    )


# ── Atendidos recientemente ──────────────────────────


def recent_treated_patients(
    store: RecordStore, limit: int | None = None
) -> list[RecentTreatedEntry]:
    """
    Pacientes distintos ordenados por su tratamiento más reciente.
    Los tratamientos de pacientes inexistentes se omiten.
    """
    if limit is None:
        limit = get_settings().RECENT_TREATED_LIMIT
    patients = {p.id: p for p in store.get_patients()}
    seen: set[UUID] = set()
    result: list[RecentTreatedEntry] = []
    for treatment in store.get_treatments():
        if len(result) >= limit:
            break
        if treatment.patient_id in seen:
            continue
        seen.add(treatment.patient_id)
        patient = patients.get(treatment.patient_id)
        if patient is None:
            continue
        result.append(RecentTreatedEntry(patient=patient, last_treatment=treatment))
    return result


# ── Ingresos ─────────────────────────────────────────


def income_in_window(
    store: RecordStore,
    window: IncomeWindow,
    now: datetime | None = None,
    zone: tzinfo | None = None,
) -> Decimal:
    """Suma de pagos no anulados dentro del día/mes/año en curso."""
    start, end = window_bounds(window, now, zone)
    return _income_between(store.get_payments(), start, end)


def daily_income_stats(
    store: RecordStore,
    days: int = 7,
    now: datetime | None = None,
    zone: tzinfo | None = None,
) -> list[DailyIncome]:
    """Ingreso y pacientes que pagaron, por día, terminando hoy."""
    zone = zone or local_zone()
    today = _local_now(now, zone).date()
    payments = [p for p in store.get_payments() if p.status != PaymentStatus.CANCELLED]
    stats: list[DailyIncome] = []
    for offset in range(days - 1, -1, -1):
        day: date = today - timedelta(days=offset)
        start, end = _midnight(day, zone), _midnight(day + timedelta(days=1), zone)
        of_day = [p for p in payments if start <= p.date < end]
        stats.append(DailyIncome(
            date=day,
            name=WEEKDAY_NAMES[day.weekday()],
            income=sum((p.amount for p in of_day), Decimal("0")),
            patients=len({p.patient_id for p in of_day}),
        ))
    return stats


# ── Dashboard ────────────────────────────────────────


def dashboard_stats(
    store: RecordStore,
    now: datetime | None = None,
    zone: tzinfo | None = None,
) -> DashboardStats:
    """KPIs del panel: ingresos, meta del mes, pacientes y citas de hoy."""
    zone = zone or local_zone()
    now = _local_now(now, zone)
    payments = store.get_payments()
    total_income = sum(
        (p.amount for p in payments if p.status != PaymentStatus.CANCELLED),
        Decimal("0"),
    )
    month_start, month_end = window_bounds(IncomeWindow.MONTH, now, zone)
    return DashboardStats(
        income=total_income,
        month_income=_income_between(payments, month_start, month_end),
        financial_goal=store.get_financial_goal(),
        patients=len(store.get_patients()),
        today_appointments=sum(
            1 for a in store.get_appointments()
            if a.date.astimezone(zone).date() == now.date()
        ),
    )
