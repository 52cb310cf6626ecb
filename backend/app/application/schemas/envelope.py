"""Response envelope returned by every endpoint."""

from typing import Any

from pydantic import BaseModel


class FieldErrorSchema(BaseModel):
    field: str
    message: str
    value: Any = None


class ApiResponse(BaseModel):
    """Successful result: ``data`` holds a record, a list plus paging, or a summary."""

    success: bool = True
    message: str
    data: Any = None


class ErrorResponse(BaseModel):
    """Failed result.

    ``errors`` is set for validation failures, ``error`` for everything else.
    ``stack`` is only ever filled outside production.
    """

    success: bool = False
    message: str
    code: str | None = None
    error: str | None = None
    errors: list[FieldErrorSchema] | None = None
    stack: list[str] | None = None
