"""
Datos por defecto: tarifario, motivos de consulta y un consultorio demo.

El tarifario y los motivos se cargan siempre en un snapshot nuevo; los datos
demo solo con SEED_DEMO_DATA o con scripts/seed_demo.py.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

from dentalflow.core.security import hash_password
from dentalflow.models.enums import (
    AppointmentType,
    CivilStatus,
    Gender,
    PaymentMethod,
    TreatmentStatus,
    UserRole,
)
from dentalflow.schemas.appointment import Appointment
from dentalflow.schemas.catalog import ProcedureItem
from dentalflow.schemas.patient import Medication, Patient
from dentalflow.schemas.payment import Payment
from dentalflow.schemas.treatment import Treatment
from dentalflow.schemas.user import Reminder, User

DEFAULT_PROCEDURES: list[tuple[str, int]] = [
    ("Consulta General", 100),
    ("Limpieza Dental", 250),
    ("Endodoncia", 800),
    ("Extracción Simple", 200),
    ("Extracción Muela Juicio", 500),
    ("Blanqueamiento", 600),
    ("Ortodoncia (Mensualidad)", 350),
    ("Prótesis", 1500),
    ("Implante", 3500),
    ("Curación", 150),
]

DEFAULT_REASONS: list[str] = [
    "Revisión General",
    "Limpieza Dental",
    "Dolor de Muela",
    "Extracción",
    "Ortodoncia",
    "Blanqueamiento",
    "Prótesis",
    "Estética",
]


def default_procedures() -> list[ProcedureItem]:
    return [
        ProcedureItem(id=uuid4(), name=name, price=Decimal(price))
        for name, price in DEFAULT_PROCEDURES
    ]


def default_reasons() -> list[str]:
    return list(DEFAULT_REASONS)


def demo_records(now: datetime | None = None) -> dict:
    """
    Consultorio de demostración con fechas relativas a `now`.
    Devuelve kwargs para construir un Snapshot.
    """
    now = now or datetime.now(timezone.utc)
    day = timedelta(days=1)

    admin = User(
        id=uuid4(), username="admin", name="Dr. Taboada (Director)",
        role=UserRole.PRINCIPAL, hashed_password=hash_password("admin"),
        last_access=now,
    )
    doctor = User(
        id=uuid4(), username="doc1", name="Dra. Vargas",
        role=UserRole.DOCTOR, hashed_password=hash_password("doc1"),
        last_access=now - timedelta(hours=1),
    )
    staff = User(
        id=uuid4(), username="recepcion", name="Secretaría General",
        role=UserRole.STAFF, hashed_password=hash_password("recepcion"),
        last_access=now - day,
    )

    juan = Patient(
        id=uuid4(), first_name="Juan", last_name="Pérez", dni="8493021 LP",
        gender=Gender.MALE, civil_status=CivilStatus.MARRIED, occupation="Arquitecto",
        allergies=["Penicilina", "Maní"], medical_history=["Hipertensión"],
        current_medications=[Medication(name="Losartan", dosage="50mg", frequency="Cada 12h")],
        general_description="Sensibilidad dental generalizada.",
        age=34, weight=75, height=175, created_at=now - 30 * day,
    )
    sofia = Patient(
        id=uuid4(), first_name="Sofia", last_name="Mendoza", dni="7483920 TJ",
        gender=Gender.FEMALE, civil_status=CivilStatus.MARRIED, occupation="Contadora",
        general_description="Caries simple.", age=30, weight=65, height=162,
        created_at=now - day,
    )
    ana = Patient(
        id=uuid4(), first_name="Ana", last_name="Vargas", dni="3948201 CB",
        gender=Gender.FEMALE, civil_status=CivilStatus.SINGLE, occupation="Estudiante",
        general_description="Ortodoncia en curso.", age=19, weight=55, height=165,
        created_at=now - 14 * day,
    )
    roberto = Patient(
        id=uuid4(), first_name="Roberto", last_name="Justiniano", dni="5647382 SC",
        gender=Gender.MALE, civil_status=CivilStatus.WIDOWED, occupation="Jubilado",
        allergies=["Látex"], medical_history=["Cardiopatía"],
        general_description="Prótesis superior.", age=65, weight=70, height=168,
        created_at=now - 7 * day,
    )

    def treatment(patient: Patient, procedure: str, description: str,
                  cost: int, when: datetime,
                  status: TreatmentStatus = TreatmentStatus.COMPLETED) -> Treatment:
        return Treatment(
            id=uuid4(), patient_id=patient.id, patient_name=patient.full_name,
            procedure=procedure, description=description, cost=Decimal(cost),
            status=status, date=when,
        )

    def payment(patient: Patient, amount: int, when: datetime,
                method: PaymentMethod, notes: str) -> Payment:
        return Payment(
            id=uuid4(), patient_id=patient.id, patient_name=patient.full_name,
            amount=Decimal(amount), method=method, notes=notes, date=when,
        )

    def appointment(patient: Patient, when: datetime,
                    kind: AppointmentType, notes: str) -> Appointment:
        return Appointment(
            id=uuid4(), patient_id=patient.id, patient_name=patient.full_name,
            date=when, type=kind, notes=notes,
        )

    return {
        "users": [admin, doctor, staff],
        "patients": [sofia, roberto, ana, juan],
        "treatments": [
            treatment(sofia, "Curación", "Resina simple pieza 36.", 150, now - day),
            treatment(roberto, "Prótesis", "Superior e inferior.", 1500, now - day,
                      TreatmentStatus.PLANNED),
            treatment(juan, "Curación", "Resina pieza 24.", 150, now - 7 * day),
            treatment(juan, "Limpieza Dental", "Profilaxis profunda.", 250, now - 60 * day),
            treatment(juan, "Consulta General", "Evaluación inicial.", 100, now - 90 * day),
            treatment(ana, "Ortodoncia (Mensualidad)", "Ajuste de brackets.", 350,
                      now - 14 * day, TreatmentStatus.IN_PROGRESS),
        ],
        "payments": [
            payment(sofia, 150, now - day, PaymentMethod.QR, "Curación"),
            payment(juan, 150, now - 30 * day, PaymentMethod.CASH, "Consulta + RX"),
            payment(ana, 350, now - 14 * day, PaymentMethod.TRANSFER, "Mes 1 pagado"),
        ],
        "appointments": [
            appointment(ana, now + day, AppointmentType.TREATMENT, "Ajuste brackets"),
            appointment(roberto, now + 2 * day, AppointmentType.REVIEW, "Prueba metal"),
        ],
        "reminders": [
            Reminder(
                id=uuid4(), text="Comprar resina compuesta A2", created_at=now - day,
                created_by=admin.name, created_by_id=admin.id,
            ),
            Reminder(
                id=uuid4(), text="Llamar al laboratorio sobre la prótesis del Sr. Roberto",
                completed=True, created_at=now - 7 * day,
                created_by=staff.name, created_by_id=staff.id,
            ),
        ],
    }
