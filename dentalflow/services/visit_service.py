"""
Atención Integral: tratamiento (cargo) + abono opcional + próxima cita
opcional, registrados como una sola unidad.

Todo se valida y se construye antes de tocar el estado, y los tres
registros se agregan en la misma transacción del store: o quedan los
tres persistidos en un único snapshot, o no queda ninguno.
"""

import logging
from decimal import Decimal
from uuid import uuid4

from dentalflow.core.exceptions import ValidationException
from dentalflow.models.enums import AppointmentStatus, PaymentStatus
from dentalflow.schemas.appointment import Appointment
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.treatment import ToothRecord, Treatment
from dentalflow.schemas.visit import IntegralVisitCreate, IntegralVisitResult
from dentalflow.store import RecordStore, require_patient

logger = logging.getLogger(__name__)


def _describe(description: str, teeth: list[ToothRecord]) -> str:
    """Agrega el detalle de piezas del odontograma a las notas de evolución."""
    description = description.strip()
    if not teeth:
        return description
    pieces = "Piezas: " + ", ".join(t.label for t in teeth)
    return f"{description} | {pieces}" if description else pieces


def _resolve_cost(store: RecordStore, procedure: str,
                  cost: Decimal | None, teeth: list[ToothRecord]) -> Decimal:
    if cost is not None:
        return cost
    base = store.find_procedure_price(procedure) or Decimal("0")
    return base + sum((t.price for t in teeth), Decimal("0"))


async def record_integral_visit(
    store: RecordStore,
    data: IntegralVisitCreate,
) -> IntegralVisitResult:
    """
    Registra la visita completa.

    - Siempre crea el tratamiento.
    - Crea el pago solo si el abono es mayor a 0; usa la misma fecha del
      tratamiento para que ambos aparezcan como un mismo evento.
    - Crea la cita de seguimiento (Pendiente) si se pidió.
    """
    draft = data.treatment
    procedure = draft.procedure.strip()
    if not procedure:
        raise ValidationException("El procedimiento es obligatorio")

    next_appt = data.next_appointment
    if next_appt is not None and next_appt.date < draft.date:
        raise ValidationException("La próxima cita no puede ser anterior a la atención")

    teeth = [t.priced() for t in draft.teeth]
    cost = _resolve_cost(store, procedure, draft.cost, teeth)
    description = _describe(draft.description, teeth)

    async with store.transaction() as state:
        patient = require_patient(state, data.patient_id)

        treatment = Treatment(
            id=uuid4(),
            patient_id=patient.id,
            patient_name=patient.full_name,
            procedure=procedure,
            description=description,
            cost=cost,
            status=draft.status,
            date=draft.date,
            teeth=teeth,
        )

        payment = None
        if data.payment is not None and data.payment.amount > 0:
            payment = Payment(
                id=uuid4(),
                patient_id=patient.id,
                patient_name=patient.full_name,
                amount=data.payment.amount,
                method=data.payment.method,
                notes=f"Pago por: {procedure}",
                date=treatment.date,
                status=PaymentStatus.COMPLETED,
            )

        appointment = None
        if next_appt is not None:
            appointment = Appointment(
                id=uuid4(),
                patient_id=patient.id,
                patient_name=patient.full_name,
                date=next_appt.date,
                type=next_appt.type,
                status=AppointmentStatus.PENDING,
                notes=next_appt.notes or f"Seguimiento: {procedure}",
            )

        state.treatments.insert(0, treatment)
        if payment is not None:
            state.payments.insert(0, payment)
        if appointment is not None:
            state.appointments.append(appointment)

    logger.info(
        f"Atención integral registrada: {patient.full_name} | {procedure} "
        f"costo={cost} abono={payment.amount if payment else 0} "
        f"cita={'sí' if appointment else 'no'}"
    )
    return IntegralVisitResult(
        treatment=treatment.model_copy(deep=True),
        payment=payment.model_copy(deep=True) if payment else None,
        appointment=appointment.model_copy(deep=True) if appointment else None,
    )
