"""
Ledger del paciente: cargos, abonos y deuda.

    deuda = Σ costo de tratamientos no planificados
          − Σ monto de pagos no anulados

Siempre se recalcula desde los registros; no hay saldos guardados.
"""

from collections.abc import Iterable
from decimal import Decimal
from uuid import UUID

from dentalflow.models.enums import PaymentStatus, TreatmentStatus
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.report import DebtorEntry, PatientBalance
from dentalflow.schemas.treatment import Treatment
from dentalflow.store import RecordStore


def summarize(treatments: Iterable[Treatment], payments: Iterable[Payment]) -> PatientBalance:
    """Balance a partir de los tratamientos y pagos de un mismo paciente."""
    total_cost = sum(
        (t.cost for t in treatments if t.status != TreatmentStatus.PLANNED),
        Decimal("0"),
    )
    total_paid = sum(
        (p.amount for p in payments if p.status != PaymentStatus.CANCELLED),
        Decimal("0"),
    )
    return PatientBalance(
        total_cost=total_cost,
        total_paid=total_paid,
        debt=total_cost - total_paid,
    )


def compute_balance(store: RecordStore, patient_id: UUID) -> PatientBalance:
    """
    Balance de un paciente. Un id desconocido da todo en cero; una deuda
    negativa es saldo a favor y se devuelve tal cual.
    """
    return summarize(
        store.get_treatments_by_patient(patient_id),
        store.get_payments_by_patient(patient_id),
    )


def list_debtors(store: RecordStore) -> list[DebtorEntry]:
    """Pacientes con deuda positiva, de mayor a menor deuda."""
    state = store.snapshot()
    treatments: dict[UUID, list[Treatment]] = {}
    payments: dict[UUID, list[Payment]] = {}
    for t in state.treatments:
        treatments.setdefault(t.patient_id, []).append(t)
    for p in state.payments:
        payments.setdefault(p.patient_id, []).append(p)

    debtors = []
    for patient in state.patients:
        debt = summarize(treatments.get(patient.id, []), payments.get(patient.id, [])).debt
        if debt > 0:
            debtors.append(DebtorEntry(patient=patient, debt=debt))
    # sort estable: los empates conservan el orden de pacientes
    debtors.sort(key=lambda entry: entry.debt, reverse=True)
    return debtors
