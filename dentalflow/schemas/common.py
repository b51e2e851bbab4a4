"""
Tipos compartidos por los schemas.
"""

from datetime import datetime, tzinfo
from typing import Annotated

from dateutil import tz
from pydantic import AfterValidator

from dentalflow.config import get_settings


def local_zone() -> tzinfo:
    """
    Zona horaria del consultorio: TIMEZONE si está configurada, si no la
    del sistema. Es una zona real (con horario de verano), no un offset fijo.
    """
    name = get_settings().TIMEZONE
    return tz.gettz(name) if name else tz.tzlocal()


def _as_aware(value: datetime) -> datetime:
    """Las fechas sin zona horaria se interpretan en la zona del consultorio."""
    return value if value.tzinfo is not None else value.replace(tzinfo=local_zone())


# Todas las fechas del dominio llevan zona horaria.
Timestamp = Annotated[datetime, AfterValidator(_as_aware)]
