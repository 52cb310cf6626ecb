"""Pydantic DTOs (Data Transfer Objects) for the Contact resource."""

from pydantic import Field

from app.application.schemas.fields import Email, PayloadModel, Phone


class ContactCreate(PayloadModel):
    """Schema for creating a new contact."""

    first_name: str = Field(..., min_length=1, max_length=50, examples=["Jo"])
    last_name: str = Field(..., min_length=1, max_length=50, examples=["Lee"])
    email: Email = Field(..., examples=["jo@example.com"])
    phone: Phone = Field(..., examples=["+1-555-0101"])
    address: str = Field("", max_length=200)
    company: str = Field("", max_length=100)
    notes: str = Field("", max_length=500)


class ContactUpdate(PayloadModel):
    """Schema for updating an existing contact — all fields optional."""

    first_name: str | None = Field(None, min_length=1, max_length=50)
    last_name: str | None = Field(None, min_length=1, max_length=50)
    email: Email | None = None
    phone: Phone | None = None
    address: str | None = Field(None, max_length=200)
    company: str | None = Field(None, max_length=100)
    notes: str | None = Field(None, max_length=500)
