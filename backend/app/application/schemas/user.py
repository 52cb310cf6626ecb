"""Pydantic DTOs (Data Transfer Objects) for the User resource."""

from pydantic import Field

from app.application.schemas.fields import Email, PayloadModel, Password


class UserCreate(PayloadModel):
    """Schema for registering a user. The password is never echoed back."""

    name: str = Field(..., min_length=2, max_length=50, examples=["Ada Lovelace"])
    email: Email = Field(..., examples=["ada@example.com"])
    age: int = Field(..., ge=13, le=120)
    password: Password


class UserUpdate(PayloadModel):
    """Schema for updating a user — all fields optional."""

    name: str | None = Field(None, min_length=2, max_length=50)
    email: Email | None = None
    age: int | None = Field(None, ge=13, le=120)
    password: Password | None = None
