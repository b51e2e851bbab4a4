"""
Tests de la Atención Integral: tratamiento + abono + próxima cita.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from dentalflow.core.exceptions import (
    NotFoundException,
    PersistenceException,
    ValidationException,
)
from dentalflow.models.enums import (
    AppointmentStatus,
    AppointmentType,
    PaymentMethod,
    PaymentStatus,
    ToothCondition,
)
from dentalflow.schemas.treatment import ToothDraft
from dentalflow.schemas.visit import (
    IntegralVisitCreate,
    VisitAppointmentDraft,
    VisitPaymentDraft,
    VisitTreatmentDraft,
)
from dentalflow.services import ledger_service
from dentalflow.services.visit_service import record_integral_visit

VISIT_DATE = datetime(2026, 3, 10, 15, 30, tzinfo=timezone.utc)


def _visit(patient_id, **overrides) -> IntegralVisitCreate:
    data = {
        "patient_id": patient_id,
        "treatment": VisitTreatmentDraft(
            procedure="Curación", description="Resina simple", cost=Decimal("150"),
            date=VISIT_DATE,
        ),
        "payment": VisitPaymentDraft(amount=Decimal("100"), method=PaymentMethod.QR),
        "next_appointment": VisitAppointmentDraft(date=VISIT_DATE + timedelta(days=7)),
    }
    data.update(overrides)
    return IntegralVisitCreate(**data)


def _is_empty(store) -> bool:
    return not (store.get_treatments() or store.get_payments() or store.get_appointments())


async def test_full_visit_creates_all_three_records(store, patient):
    result = await record_integral_visit(store, _visit(patient.id))

    assert result.treatment.patient_name == "Juan Pérez"
    assert result.treatment.cost == Decimal("150")

    assert result.payment is not None
    assert result.payment.amount == Decimal("100")
    assert result.payment.method == PaymentMethod.QR
    assert result.payment.status == PaymentStatus.COMPLETED
    assert result.payment.date == result.treatment.date
    assert result.payment.notes == "Pago por: Curación"

    assert result.appointment is not None
    assert result.appointment.status == AppointmentStatus.PENDING
    assert result.appointment.type == AppointmentType.TREATMENT
    assert result.appointment.notes == "Seguimiento: Curación"

    assert [t.id for t in store.get_treatments()] == [result.treatment.id]
    assert [p.id for p in store.get_payments()] == [result.payment.id]
    assert [a.id for a in store.get_appointments()] == [result.appointment.id]
    assert ledger_service.compute_balance(store, patient.id).debt == Decimal("50")


async def test_visit_is_persisted_in_a_single_write(store, backend, patient):
    before = backend.saves

    await record_integral_visit(store, _visit(patient.id))

    assert backend.saves == before + 1


async def test_zero_payment_is_not_recorded(store, patient):
    result = await record_integral_visit(
        store, _visit(patient.id, payment=VisitPaymentDraft(amount=Decimal("0")))
    )

    assert result.payment is None
    assert store.get_payments() == []
    assert ledger_service.compute_balance(store, patient.id).debt == Decimal("150")


async def test_visit_without_optional_parts(store, patient):
    result = await record_integral_visit(
        store, _visit(patient.id, payment=None, next_appointment=None)
    )

    assert result.payment is None
    assert result.appointment is None
    assert len(store.get_treatments()) == 1


async def test_custom_appointment_notes_are_kept(store, patient):
    draft = VisitAppointmentDraft(
        date=VISIT_DATE + timedelta(days=1), type=AppointmentType.REVIEW, notes="Control"
    )
    result = await record_integral_visit(store, _visit(patient.id, next_appointment=draft))

    assert result.appointment.notes == "Control"
    assert result.appointment.type == AppointmentType.REVIEW


async def test_cost_defaults_to_catalog_price_plus_teeth(store, patient):
    treatment = VisitTreatmentDraft(
        procedure="Curación",
        description="Resina",
        date=VISIT_DATE,
        teeth=[
            ToothDraft(number=16, condition=ToothCondition.CARIES),
            ToothDraft(number=26, condition=ToothCondition.FILLED),
        ],
    )
    result = await record_integral_visit(
        store, _visit(patient.id, treatment=treatment, payment=None)
    )

    # 150 del tarifario + 120 (caries) + 150 (obturado)
    assert result.treatment.cost == Decimal("420")
    assert result.treatment.description == "Resina | Piezas: 16(caries), 26(obturado)"
    assert [t.price for t in result.treatment.teeth] == [Decimal("120"), Decimal("150")]


async def test_unknown_procedure_without_cost_is_free(store, patient):
    treatment = VisitTreatmentDraft(procedure="Sellante", date=VISIT_DATE)
    result = await record_integral_visit(
        store, _visit(patient.id, treatment=treatment, payment=None)
    )

    assert result.treatment.cost == Decimal("0")


async def test_empty_procedure_is_rejected(store, patient):
    treatment = VisitTreatmentDraft(procedure="   ", cost=Decimal("100"), date=VISIT_DATE)

    with pytest.raises(ValidationException):
        await record_integral_visit(store, _visit(patient.id, treatment=treatment))

    assert _is_empty(store)


async def test_unknown_patient_creates_nothing(store):
    with pytest.raises(NotFoundException):
        await record_integral_visit(store, _visit(uuid4()))

    assert _is_empty(store)


async def test_follow_up_before_visit_is_rejected(store, patient):
    draft = VisitAppointmentDraft(date=VISIT_DATE - timedelta(hours=1))

    with pytest.raises(ValidationException):
        await record_integral_visit(store, _visit(patient.id, next_appointment=draft))

    assert _is_empty(store)


async def test_backend_failure_creates_nothing(store, backend, patient):
    backend.fail = True

    with pytest.raises(PersistenceException):
        await record_integral_visit(store, _visit(patient.id))

    assert _is_empty(store)
    backend.fail = False
    assert (await backend.load_snapshot()).treatments == []


async def test_visit_without_appointment_adds_exact_debt(store, patient, charge):
    await charge(patient, "80")
    result = await record_integral_visit(store, _visit(
        patient.id,
        treatment=VisitTreatmentDraft(procedure="Endodoncia", cost=Decimal("200"), date=VISIT_DATE),
        payment=VisitPaymentDraft(amount=Decimal("150")),
        next_appointment=None,
    ))

    assert len(store.get_treatments_by_patient(patient.id)) == 2
    assert [p.amount for p in store.get_payments()] == [Decimal("150")]
    assert result.payment.date == VISIT_DATE
    assert store.get_appointments() == []
    assert ledger_service.compute_balance(store, patient.id).debt == Decimal("130")


def test_tooth_draft_takes_price_from_condition():
    record = ToothDraft(number=11, condition=ToothCondition.CROWN).priced()

    assert record.price == Decimal("450")
    assert record.label == "11(corona)"

    with pytest.raises(ValidationError):
        ToothDraft(number=11, condition=ToothCondition.CROWN, price=Decimal("1"))
