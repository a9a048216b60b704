"""
Route models.
Owns: Request/response schemas for all routes.

Request models are the input validator: every constraint lives on the
field, and FastAPI reports all violations at once as a 422.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, EmailStr, Field, StrictBool, field_validator

from app.api.auth.passwords import MAX_PASSWORD_BYTES

MIN_PASSWORD_LENGTH = 8


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v


# =============================================================================
# User Models
# =============================================================================


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    joined_on: datetime = Field(default_factory=utcnow)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class LoginFailureResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Todo Models
# =============================================================================


class CreateTodoRequest(BaseModel):
    """Client-supplied ``user_id`` and ``created_at`` are not fields and are dropped."""
    item: str = Field(..., min_length=1)
    completed: StrictBool = False

    @field_validator("item")
    @classmethod
    def validate_item(cls, v: str) -> str:
        return _not_blank(v)


class UpdateTodoRequest(BaseModel):
    item: str | None = Field(default=None, min_length=1)
    completed: StrictBool | None = None

    @field_validator("item")
    @classmethod
    def validate_item(cls, v: str | None) -> str | None:
        return None if v is None else _not_blank(v)

    def patch(self) -> dict[str, Any]:
        """Only the fields the caller actually supplied."""
        return self.model_dump(exclude_none=True)


class TodoResponse(BaseModel):
    id: str
    item: str
    completed: bool
    user_id: str
    created_at: datetime


class TodoListResponse(BaseModel):
    data: list[TodoResponse]


class TodoEnvelope(BaseModel):
    data: TodoResponse


class HealthResponse(BaseModel):
    status: str
