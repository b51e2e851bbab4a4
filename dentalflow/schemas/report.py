"""
Schemas de ledger y reportes: balances, deudores, dashboard.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from dentalflow.schemas.patient import Patient
from dentalflow.schemas.treatment import Treatment


class PatientBalance(BaseModel):
    total_cost: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    debt: Decimal = Decimal("0")


class DebtorEntry(BaseModel):
    patient: Patient
    debt: Decimal


class RecentTreatedEntry(BaseModel):
    patient: Patient
    last_treatment: Treatment


class IncomeResponse(BaseModel):
    window: str
    total: Decimal


class DashboardStats(BaseModel):
    """KPIs del panel principal."""
    income: Decimal
    month_income: Decimal
    financial_goal: Decimal
    patients: int
    today_appointments: int


class DailyIncome(BaseModel):
    date: date
    name: str
    income: Decimal
    patients: int
