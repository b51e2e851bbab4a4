"""
Tests de reportes: ventanas de ingresos, ingresos diarios, atendidos
recientemente y KPIs del dashboard.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from dateutil import tz

from dentalflow.config import get_settings
from dentalflow.models.enums import AppointmentStatus, IncomeWindow, TreatmentStatus
from dentalflow.schemas.appointment import AppointmentCreate
from dentalflow.schemas.patient import PatientCreate
from dentalflow.services import report_service

UTC = timezone.utc
NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)
NEW_YORK = tz.gettz("America/New_York")


def test_month_window_is_calendar_aligned():
    start, end = report_service.window_bounds(IncomeWindow.MONTH, NOW, UTC)

    assert start == datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert end == datetime(2026, 4, 1, tzinfo=timezone.utc)


def test_month_window_rolls_over_december():
    start, end = report_service.window_bounds(
        IncomeWindow.MONTH, datetime(2026, 12, 31, 23, 0, tzinfo=timezone.utc), UTC
    )

    assert start == datetime(2026, 12, 1, tzinfo=timezone.utc)
    assert end == datetime(2027, 1, 1, tzinfo=timezone.utc)


def test_month_window_follows_daylight_saving():
    # 5 de marzo en Nueva York, todavía en horario estándar (UTC-5)
    now = datetime(2026, 3, 5, 12, 0, tzinfo=timezone(timedelta(hours=-5)))

    start, end = report_service.window_bounds(IncomeWindow.MONTH, now, NEW_YORK)

    assert start == datetime(2026, 3, 1, 5, 0, tzinfo=UTC)
    assert end == datetime(2026, 4, 1, 4, 0, tzinfo=UTC)
    assert (start.utcoffset(), end.utcoffset()) == (timedelta(hours=-5), timedelta(hours=-4))


def test_day_and_year_windows():
    day_start, day_end = report_service.window_bounds(IncomeWindow.DAY, NOW, UTC)
    year_start, year_end = report_service.window_bounds(IncomeWindow.YEAR, NOW, UTC)

    assert (day_start, day_end) == (
        datetime(2026, 3, 15, tzinfo=timezone.utc),
        datetime(2026, 3, 16, tzinfo=timezone.utc),
    )
    assert (year_start, year_end) == (
        datetime(2026, 1, 1, tzinfo=timezone.utc),
        datetime(2027, 1, 1, tzinfo=timezone.utc),
    )


async def test_month_income_includes_last_millisecond_only(store, patient, pay):
    await pay(patient, "100", date=datetime(2026, 3, 1, tzinfo=timezone.utc))
    await pay(patient, "50", date=datetime(2026, 3, 31, 23, 59, 59, 999000, tzinfo=timezone.utc))
    await pay(patient, "999", date=datetime(2026, 4, 1, tzinfo=timezone.utc))
    await pay(patient, "777", date=datetime(2026, 2, 28, 23, 59, 59, tzinfo=timezone.utc))

    total = report_service.income_in_window(store, IncomeWindow.MONTH, now=NOW, zone=UTC)

    assert total == Decimal("150")


async def test_income_skips_cancelled_payments(store, patient, pay):
    await pay(patient, "200", date=NOW)
    cancelled = await pay(patient, "80", date=NOW)
    await store.cancel_payment(cancelled.id)

    assert report_service.income_in_window(store, IncomeWindow.DAY, now=NOW, zone=UTC) == Decimal("200")
    assert report_service.income_in_window(store, IncomeWindow.YEAR, now=NOW, zone=UTC) == Decimal("200")


async def test_daily_income_covers_last_seven_days(store, patient, other_patient, pay):
    await pay(patient, "100", date=NOW)
    await pay(other_patient, "50", date=NOW - timedelta(hours=2))
    await pay(patient, "70", date=NOW - timedelta(days=2))
    await pay(patient, "500", date=NOW - timedelta(days=8))

    stats = report_service.daily_income_stats(store, now=NOW, zone=UTC)

    assert len(stats) == 7
    assert stats[-1].date == NOW.date()
    assert stats[0].date == (NOW - timedelta(days=6)).date()
    # 2026-03-15 es domingo
    assert stats[-1].name == "Dom"
    assert stats[-1].income == Decimal("150")
    assert stats[-1].patients == 2
    assert stats[-3].income == Decimal("70")
    assert sum((s.income for s in stats), Decimal("0")) == Decimal("220")


async def test_recent_treated_lists_each_patient_once(store, patient, other_patient, charge):
    await charge(patient, "100", date=NOW - timedelta(days=10))
    await charge(other_patient, "100", date=NOW - timedelta(days=5))
    await charge(patient, "100", date=NOW - timedelta(days=1))

    recent = report_service.recent_treated_patients(store)

    assert [entry.patient.id for entry in recent] == [patient.id, other_patient.id]
    assert recent[0].last_treatment.date == NOW - timedelta(days=1)


async def test_recent_treated_respects_limit(store, charge):
    for i in range(7):
        p = await store.add_patient(
            PatientCreate(first_name=f"Paciente{i}", last_name="Test", dni=f"{i}000")
        )
        await charge(p, "100", date=NOW - timedelta(days=i))

    assert len(report_service.recent_treated_patients(store)) == 5
    assert len(report_service.recent_treated_patients(store, limit=2)) == 2


async def test_dashboard_stats(store, patient, other_patient, pay, charge):
    await pay(patient, "300", date=NOW)
    await pay(other_patient, "200", date=NOW - timedelta(days=40))
    await charge(patient, "900", TreatmentStatus.PLANNED, date=NOW)
    today = await store.add_appointment(
        AppointmentCreate(patient_id=patient.id, date=NOW + timedelta(hours=3))
    )
    await store.add_appointment(
        AppointmentCreate(patient_id=other_patient.id, date=NOW + timedelta(days=1))
    )

    stats = report_service.dashboard_stats(store, now=NOW, zone=UTC)

    assert stats.income == Decimal("500")
    assert stats.month_income == Decimal("300")
    assert stats.financial_goal == Decimal("3300")
    assert stats.patients == 2
    assert stats.today_appointments == 1
    assert today.status == AppointmentStatus.PENDING


async def test_payment_after_clock_change_belongs_to_one_month(store, patient, pay):
    march_now = datetime(2026, 3, 5, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
    april_now = datetime(2026, 4, 15, 12, 0, tzinfo=NEW_YORK)
    await pay(patient, "50", date=datetime(2026, 3, 31, 23, 59, 59, 999000, tzinfo=NEW_YORK))
    await pay(patient, "999", date=datetime(2026, 4, 1, 0, 30, tzinfo=NEW_YORK))

    march = report_service.income_in_window(store, IncomeWindow.MONTH, march_now, NEW_YORK)
    april = report_service.income_in_window(store, IncomeWindow.MONTH, april_now, NEW_YORK)

    assert march == Decimal("50")
    assert april == Decimal("999")


async def test_configured_timezone_is_the_default(store, patient, pay, monkeypatch):
    monkeypatch.setattr(get_settings(), "TIMEZONE", "America/New_York")
    await pay(patient, "999", date=datetime(2026, 4, 1, 0, 30, tzinfo=NEW_YORK))

    march_now = datetime(2026, 3, 5, 12, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert report_service.income_in_window(store, IncomeWindow.MONTH, now=march_now) == Decimal("0")


async def test_daily_income_days_follow_the_clock_change(store, patient, pay):
    # el 8 de marzo de 2026 Nueva York pasa a UTC-4
    await pay(patient, "80", date=datetime(2026, 3, 8, 23, 30, tzinfo=NEW_YORK))
    await pay(patient, "40", date=datetime(2026, 3, 9, 0, 15, tzinfo=NEW_YORK))

    stats = report_service.daily_income_stats(
        store, days=2, now=datetime(2026, 3, 9, 12, 0, tzinfo=NEW_YORK), zone=NEW_YORK
    )

    assert [(s.date.day, s.income) for s in stats] == [(8, Decimal("80")), (9, Decimal("40"))]


async def test_recent_treated_with_zero_limit(store, patient, charge):
    await charge(patient, "100")

    assert report_service.recent_treated_patients(store, limit=0) == []
