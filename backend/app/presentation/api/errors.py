"""Error envelope formatter — the single place failures become HTTP responses.

Domain exceptions carry their own status and code; framework errors
(request validation, unknown routes) and unexpected exceptions are shaped
into the same ``{success: false, message, ...}`` body.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.application.schemas import ErrorResponse, FieldErrorSchema
from app.config import get_settings
from app.domain.exceptions import AppError, ValidationError
from app.infrastructure.logging.log_config import ERROR_LOGGER

logger = logging.getLogger(ERROR_LOGGER)

_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
    )


def _context(request: Request, status_code: int, code: str | None) -> dict:
    return {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "error_code": code,
    }


def _loc_to_field(loc: tuple) -> str:
    parts = list(loc)
    if parts and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    # json_invalid reports a character offset, not a field
    if not parts or not isinstance(parts[-1], str):
        return "body"
    return parts[-1]


def _request_field_error(error: dict) -> FieldErrorSchema:
    field = _loc_to_field(tuple(error.get("loc", ())))
    echo_value = error.get("type") not in ("missing", "json_invalid") and field != "body"
    return FieldErrorSchema(
        field=field,
        message=error.get("msg", "Invalid value"),
        value=error.get("input") if echo_value else None,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "%s %s → %d %s: %s",
        request.method, request.url.path, exc.status_code, exc.code, exc.detail,
        extra=_context(request, exc.status_code, exc.code),
    )
    if isinstance(exc, ValidationError):
        body = ErrorResponse(
            message=exc.message,
            code=exc.code,
            errors=[FieldErrorSchema(**e.to_dict()) for e in exc.errors],
        )
    else:
        body = ErrorResponse(message=exc.message, code=exc.code, error=exc.detail)
    return error_response(exc.status_code, body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Query/path parameter and malformed-JSON failures share the 422 shape."""
    errors = [_request_field_error(e) for e in exc.errors()]
    status_code = ValidationError.status_code
    logger.warning(
        "%s %s → %d request validation (%d errors)",
        request.method, request.url.path, status_code, len(errors),
        extra=_context(request, status_code, ValidationError.code),
    )
    body = ErrorResponse(message="Validation failed", code=ValidationError.code, errors=errors)
    return error_response(status_code, body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = ErrorResponse(
            message="Route not found",
            code="NOT_FOUND",
            error=f"The requested endpoint {request.method} {request.url.path} does not exist",
        )
    else:
        body = ErrorResponse(message=str(exc.detail), code="HTTP_ERROR", error=str(exc.detail))
    logger.info(
        "%s %s → %d", request.method, request.url.path, exc.status_code,
        extra=_context(request, exc.status_code, body.code),
    )
    return error_response(exc.status_code, body)


async def unhandled_error_middleware(request: Request, call_next):
    """Turn anything the handlers above did not anticipate into a 500 envelope."""
    try:
        return await call_next(request)
    except Exception as exc:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        logger.exception(
            "%s %s → unhandled %s", request.method, request.url.path, type(exc).__name__,
            extra=_context(request, status_code, "INTERNAL_ERROR"),
        )
        if get_settings().is_production:
            body = ErrorResponse(
                message="Internal server error",
                code="INTERNAL_ERROR",
                error="Something went wrong",
            )
        else:
            body = ErrorResponse(
                message="Internal server error",
                code="INTERNAL_ERROR",
                error=str(exc) or type(exc).__name__,
                stack=traceback.format_exception(type(exc), exc, exc.__traceback__),
            )
        return error_response(status_code, body)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers and the catch-all middleware to ``app``."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(unhandled_error_middleware)
