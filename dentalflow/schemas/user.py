"""
Schemas para User y Reminder.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from dentalflow.models.enums import UserRole
from dentalflow.schemas.common import Timestamp


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[a-zA-Z0-9_.-]+$")
    name: str = Field(..., min_length=2, max_length=200)
    role: UserRole = UserRole.STAFF
    password: str = Field(..., min_length=3, max_length=128)


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=200)
    role: UserRole | None = None
    password: str | None = Field(None, min_length=3, max_length=128)


class User(BaseModel):
    id: UUID
    username: str
    name: str
    role: UserRole
    hashed_password: str
    last_access: Timestamp


class UserResponse(BaseModel):
    id: UUID
    username: str
    name: str
    role: UserRole
    last_access: Timestamp

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: str
    password: str


class ReminderCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=500)
    user_id: UUID


class Reminder(BaseModel):
    id: UUID
    text: str
    completed: bool = False
    created_at: Timestamp
    created_by: str
    created_by_id: UUID
