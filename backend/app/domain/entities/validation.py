"""Validation outcome types — a tagged result instead of an exception."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """One failed rule on one field."""

    field: str
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"field": self.field, "message": self.message}
        if self.value is not None:
            out["value"] = self.value
        return out


@dataclass(frozen=True)
class ValidationResult:
    """Either a normalized payload (``value``) or the list of field errors."""

    value: dict[str, Any] | None = None
    errors: tuple[FieldError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, value: dict[str, Any]) -> "ValidationResult":
        return cls(value=value)

    @classmethod
    def failure(cls, errors: list[FieldError]) -> "ValidationResult":
        return cls(errors=tuple(errors))
