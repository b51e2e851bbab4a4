"""
Snapshot: estado completo del consultorio, persistido como una unidad.

Las colecciones ausentes en un snapshot guardado se cargan vacías; el
tarifario, los motivos y la meta toman sus valores por defecto.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from dentalflow.config import get_settings
from dentalflow.schemas.appointment import Appointment
from dentalflow.schemas.catalog import ProcedureItem
from dentalflow.schemas.patient import Patient
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.treatment import Treatment
from dentalflow.schemas.user import Reminder, User
from dentalflow.seed import default_procedures, default_reasons


def _default_goal() -> Decimal:
    return get_settings().DEFAULT_FINANCIAL_GOAL


class Snapshot(BaseModel):
    users: list[User] = Field(default_factory=list)
    patients: list[Patient] = Field(default_factory=list)
    appointments: list[Appointment] = Field(default_factory=list)
    treatments: list[Treatment] = Field(default_factory=list)
    payments: list[Payment] = Field(default_factory=list)
    reminders: list[Reminder] = Field(default_factory=list)
    procedures: list[ProcedureItem] = Field(default_factory=default_procedures)
    consultation_reasons: list[str] = Field(default_factory=default_reasons)
    financial_goal: Decimal = Field(default_factory=_default_goal, ge=0)
