"""
Enums del dominio y tablas de precios.

Los valores son los textos que ve el usuario y los que se guardan en el
snapshot, por eso están en español.
"""

import enum
from decimal import Decimal


class TreatmentStatus(str, enum.Enum):
    """Estado de un tratamiento. Los planificados no generan cargo."""
    PLANNED = "Planificado"
    IN_PROGRESS = "En Proceso"
    COMPLETED = "Completado"


class PaymentStatus(str, enum.Enum):
    """Estado de un pago. Los anulados no cuentan en el ledger."""
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, enum.Enum):
    """Método de pago."""
    CASH = "Efectivo"
    QR = "QR"
    CARD = "Tarjeta"
    TRANSFER = "Transferencia"


class AppointmentType(str, enum.Enum):
    CONSULTATION = "Consulta"
    TREATMENT = "Tratamiento"
    REVIEW = "Revisión"
    EMERGENCY = "Emergencia"


class AppointmentStatus(str, enum.Enum):
    """Estados de una cita."""
    PENDING = "Pendiente"
    COMPLETED = "Completada"
    CANCELLED = "Cancelada"


# ── Transiciones válidas de una cita ─────────────────
VALID_TRANSITIONS: dict[AppointmentStatus, list[AppointmentStatus]] = {
    AppointmentStatus.PENDING: [
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
    ],
    # Estados terminales: no tienen transiciones
    AppointmentStatus.COMPLETED: [],
    AppointmentStatus.CANCELLED: [],
}


class UserRole(str, enum.Enum):
    """Roles del consultorio."""
    PRINCIPAL = "PRINCIPAL"
    DOCTOR = "DOCTOR"
    STAFF = "STAFF"


class Gender(str, enum.Enum):
    MALE = "Masculino"
    FEMALE = "Femenino"
    OTHER = "Otro"


class CivilStatus(str, enum.Enum):
    SINGLE = "Soltero/a"
    MARRIED = "Casado/a"
    DIVORCED = "Divorciado/a"
    WIDOWED = "Viudo/a"
    COMMON_LAW = "Unión Libre"


class ToothCondition(str, enum.Enum):
    """Condiciones de una pieza en el odontograma."""
    HEALTHY = "sano"
    CARIES = "caries"
    FILLED = "obturado"
    CROWN = "corona"
    EXTRACTION = "extraccion"
    BRIDGE = "puente"
    XRAY = "rx"
    MISSING = "ausente"


# Precio de referencia por condición tratada en la visita
TOOTH_PRICES: dict[ToothCondition, Decimal] = {
    ToothCondition.HEALTHY: Decimal("0"),
    ToothCondition.CARIES: Decimal("120"),
    ToothCondition.FILLED: Decimal("150"),
    ToothCondition.CROWN: Decimal("450"),
    ToothCondition.EXTRACTION: Decimal("100"),
    ToothCondition.BRIDGE: Decimal("600"),
    ToothCondition.XRAY: Decimal("80"),
    ToothCondition.MISSING: Decimal("0"),
}


class IncomeWindow(str, enum.Enum):
    """Ventanas calendario para sumar ingresos."""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
