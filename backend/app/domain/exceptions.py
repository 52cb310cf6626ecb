"""Domain-specific exceptions — framework-independent.

Every error a request can end with is one of these. The presentation layer
maps ``status_code``/``code`` onto the response envelope; nothing here knows
about HTTP beyond the numeric status.
"""

from app.domain.entities.validation import FieldError


class AppError(Exception):
    """Base class for anticipated failures.

    ``message`` is the short summary shown to the caller, ``detail`` the
    longer explanation (defaults to the summary).
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail if detail is not None else message
        super().__init__(self.detail)


class BadRequestError(AppError):
    """Raised when a request is malformed in a way no field rule covers."""

    status_code = 400
    code = "BAD_REQUEST"


class ValidationError(AppError):
    """Raised when a payload fails one or more field rules."""

    status_code = 422
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        self.errors = list(errors)
        fields = ", ".join(e.field for e in self.errors)
        super().__init__(message, f"Invalid fields: {fields}" if fields else message)


class AuthenticationError(AppError):
    """Raised when a credential is missing or unknown."""

    status_code = 401
    code = "AUTHENTICATION_ERROR"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__("Authentication failed", detail)


class AuthorizationError(AppError):
    """Raised when a valid principal lacks rights on the target record."""

    status_code = 403
    code = "AUTHORIZATION_ERROR"

    def __init__(self, detail: str = "Not authorized"):
        super().__init__("Not authorized", detail)


class NotFoundError(AppError):
    """Raised when the addressed thing does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class EntityNotFoundError(NotFoundError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} not found",
            f"No {entity_type.lower()} exists with ID: {entity_id}",
        )


class ConflictError(AppError):
    """Raised when a write would violate a uniqueness constraint."""

    status_code = 409
    code = "CONFLICT"


class DuplicateEntityError(ConflictError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(
            f"Duplicate {field}",
            f"A {entity_type.lower()} with this {field} already exists",
        )
