"""
Router principal de la API v1.
Agrupa todos los sub-routers de la versión 1.
"""

from fastapi import APIRouter

from dentalflow.api.v1.appointments import router as appointments_router
from dentalflow.api.v1.finance import router as finance_router
from dentalflow.api.v1.patients import router as patients_router
from dentalflow.api.v1.payments import router as payments_router
from dentalflow.api.v1.reminders import router as reminders_router
from dentalflow.api.v1.reports import router as reports_router
from dentalflow.api.v1.settings import router as settings_router
from dentalflow.api.v1.treatments import router as treatments_router
from dentalflow.api.v1.users import router as users_router
from dentalflow.api.v1.visits import router as visits_router

api_v1_router = APIRouter()

api_v1_router.include_router(
    patients_router,
    prefix="/patients",
    tags=["Pacientes"],
)

api_v1_router.include_router(
    treatments_router,
    prefix="/treatments",
    tags=["Tratamientos"],
)

api_v1_router.include_router(
    payments_router,
    prefix="/payments",
    tags=["Pagos"],
)

api_v1_router.include_router(
    appointments_router,
    prefix="/appointments",
    tags=["Citas"],
)

api_v1_router.include_router(
    visits_router,
    prefix="/visits",
    tags=["Atención Integral"],
)

api_v1_router.include_router(
    finance_router,
    prefix="/finance",
    tags=["Finanzas"],
)

api_v1_router.include_router(
    reports_router,
    prefix="/reports",
    tags=["Reportes"],
)

api_v1_router.include_router(
    users_router,
    prefix="/users",
    tags=["Usuarios"],
)

api_v1_router.include_router(
    reminders_router,
    prefix="/reminders",
    tags=["Recordatorios"],
)

api_v1_router.include_router(
    settings_router,
    prefix="/settings",
    tags=["Configuración"],
)
