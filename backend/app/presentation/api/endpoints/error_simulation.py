"""Routes that raise each error class on demand, for exercising clients.

Only mounted outside production.
"""

from fastapi import APIRouter

from app.domain.entities import FieldError
from app.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

router = APIRouter(prefix="/test", tags=["Error simulation"])


@router.get("/400")
async def simulate_bad_request() -> None:
    raise BadRequestError("Bad request", "This is a simulated bad request error")


@router.get("/401")
async def simulate_authentication_error() -> None:
    raise AuthenticationError("This is a simulated authentication error")


@router.get("/403")
async def simulate_authorization_error() -> None:
    raise AuthorizationError("This is a simulated authorization error")


@router.get("/404")
async def simulate_not_found() -> None:
    raise NotFoundError("Resource not found", "This is a simulated not found error")


@router.get("/409")
async def simulate_conflict() -> None:
    raise ConflictError("Conflict", "This is a simulated conflict error")


@router.get("/422")
async def simulate_validation_error() -> None:
    raise ValidationError(
        [
            FieldError(field="email", message="Invalid email format", value="invalid-email"),
            FieldError(field="age", message="Age must be a number", value="not-a-number"),
        ],
        message="This is a simulated validation error",
    )


@router.get("/500")
async def simulate_server_error() -> None:
    raise RuntimeError("This is a simulated internal server error")
