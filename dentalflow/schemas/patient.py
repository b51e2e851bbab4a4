"""
Schemas para Patient.
Ficha clínica: antecedentes, alergias y medicación actual.
"""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator

from dentalflow.models.enums import CivilStatus, Gender
from dentalflow.schemas.common import Timestamp


class Medication(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    dosage: str = ""
    frequency: str = ""


def _clean_tags(values: list[str]) -> list[str]:
    """Quita vacíos y duplicados conservando el orden."""
    cleaned: list[str] = []
    for value in values:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class PatientBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    dni: str = Field(..., min_length=1, max_length=20, description="Carnet de identidad")
    phone: str | None = Field(None, max_length=20)
    email: EmailStr | None = None
    allergies: list[str] = Field(default_factory=list)
    medical_history: list[str] = Field(
        default_factory=list, description="Antecedentes: Hipertensión, Diabetes..."
    )
    current_medications: list[Medication] = Field(default_factory=list)
    general_description: str = Field("", max_length=2000, description="Motivo de consulta")
    age: int | None = Field(None, ge=0, le=130)
    weight: float | None = Field(None, gt=0, description="Kg")
    height: float | None = Field(None, gt=0, description="Cm")
    gender: Gender | None = None
    occupation: str | None = Field(None, max_length=100)
    civil_status: CivilStatus | None = None

    @field_validator("first_name", "last_name", "dni")
    @classmethod
    def strip_required(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("El campo no puede estar vacío")
        return cleaned

    @field_validator("allergies", "medical_history")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class PatientCreate(PatientBase):
    pass


class PatientUpdate(BaseModel):
    """Solo se aplican los campos enviados."""
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    dni: str | None = Field(None, min_length=1, max_length=20)
    phone: str | None = Field(None, max_length=20)
    email: EmailStr | None = None
    allergies: list[str] | None = None
    medical_history: list[str] | None = None
    current_medications: list[Medication] | None = None
    general_description: str | None = Field(None, max_length=2000)
    age: int | None = Field(None, ge=0, le=130)
    weight: float | None = Field(None, gt=0)
    height: float | None = Field(None, gt=0)
    gender: Gender | None = None
    occupation: str | None = Field(None, max_length=100)
    civil_status: CivilStatus | None = None

    @field_validator("allergies", "medical_history")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v) if v is not None else v


class Patient(PatientBase):
    id: UUID
    created_at: Timestamp

    @computed_field
    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
