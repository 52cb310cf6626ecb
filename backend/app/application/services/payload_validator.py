"""Schema validation for incoming payloads — returns a tagged result, never raises."""

from collections.abc import Collection
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.domain.entities import FieldError, ValidationResult

_BODY = "body"


def _field_name(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) if loc else _BODY


def _to_field_error(error: dict[str, Any], redact: Collection[str]) -> FieldError:
    field = _field_name(tuple(error.get("loc", ())))
    if error["type"] == "missing":
        return FieldError(field=field, message=f"{field} is required")
    value = None if field in redact else error.get("input")
    return FieldError(field=field, message=error["msg"], value=value)


def validate_payload(
    payload: Any,
    schema: type[BaseModel],
    *,
    partial: bool = False,
    redact: Collection[str] = (),
) -> ValidationResult:
    """Validate ``payload`` against ``schema``, reporting every failing field.

    Args:
        payload: Decoded JSON body. Anything but an object is rejected.
        schema: Pydantic model describing the resource's fields.
        partial: Keep only the keys the caller actually sent (updates).
        redact: Fields whose offending value must not be echoed back.

    Returns:
        ValidationResult with the normalized wire-named values, or the errors.
    """
    if not isinstance(payload, dict):
        return ValidationResult.failure(
            [FieldError(field=_BODY, message="Request body must be a JSON object")]
        )

    try:
        model = schema.model_validate(payload)
    except PydanticValidationError as exc:
        return ValidationResult.failure([_to_field_error(e, redact) for e in exc.errors()])

    value = model.model_dump(
        mode="json",
        by_alias=True,
        exclude_unset=partial,
        exclude_none=partial,
    )
    return ValidationResult.success(value)
