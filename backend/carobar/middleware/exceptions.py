"""Custom exceptions and handlers for consistent error responses.

Every client-facing failure renders as:
{
    "error": {
        "code": "ERROR_CODE",
        "message": "Human-readable error message",
        "details": {...}  // Optional additional details
    }
}

Internal exception text is logged, never echoed to the caller.
"""

import logging
from typing import Union

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class CarobarException(Exception):
    """Base exception for Carobar application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Union[dict, list, None] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class RequestValidationFailed(CarobarException):
    """Request body failed schema validation."""

    def __init__(self, errors: list[dict], message: str = "Validation failed"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
            details={"errors": errors},
        )


class BadRequestError(CarobarException):
    """Malformed request (missing parameter, unreadable body)."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="BAD_REQUEST",
        )


class PermissionDeniedError(CarobarException):
    """Caller's role is not allowed to perform the operation."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="PERMISSION_DENIED",
        )


class ResourceNotFoundError(CarobarException):
    """Exception for resources not found."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="RESOURCE_NOT_FOUND",
        )


class ConflictError(CarobarException):
    """Key already taken, or record still referenced elsewhere."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            error_code="CONFLICT",
        )


class PersistenceError(CarobarException):
    """Unexpected storage failure. The message stays generic."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="PERSISTENCE_ERROR",
        )


def format_validation_errors(errors: list[dict]) -> list[dict]:
    """Flatten pydantic error dicts to {field, message, type}."""
    formatted = []
    for error in errors:
        field = " -> ".join(str(loc) for loc in error["loc"])
        formatted.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return formatted


def create_error_response(
    status_code: int,
    message: str,
    error_code: str = "ERROR",
    details: Union[dict, list, None] = None,
    headers: dict | None = None,
) -> JSONResponse:
    """Render the `{"error": {code, message, details?}}` envelope."""
    error = {"code": error_code, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error}, headers=headers)


def _request_context(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


# ── Handlers ────────────────────────────────────────────────

async def carobar_exception_handler(request: Request, exc: CarobarException) -> JSONResponse:
    """Application errors raised on purpose by controllers and routers."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}",
        extra={**_request_context(request), "error_code": exc.error_code},
    )
    return create_error_response(exc.status_code, exc.message, exc.error_code, exc.details)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException],
) -> JSONResponse:
    """401 from the auth dependency, 404/405 from routing."""
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {exc.detail}", extra=_request_context(request))

    return create_error_response(
        exc.status_code,
        str(exc.detail),
        f"HTTP_{exc.status_code}",
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: Union[RequestValidationError, ValidationError],
) -> JSONResponse:
    """Query / path parameter errors caught by FastAPI before the handler runs."""
    logger.warning(f"Validation error on {request.url.path}", extra=_request_context(request))
    return create_error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        "VALIDATION_ERROR",
        {"errors": format_validation_errors(exc.errors())},
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations that surfaced outside a controller, e.g. at commit."""
    logger.error(f"Integrity error on {request.url.path}: {exc}", extra=_request_context(request))

    if "foreign key" in str(exc.orig if exc.orig is not None else exc).lower():
        return create_error_response(
            status.HTTP_409_CONFLICT,
            "Record is referenced by other data",
            "FOREIGN_KEY_VIOLATION",
        )
    return create_error_response(
        status.HTTP_409_CONFLICT,
        "A record with this value already exists",
        "DUPLICATE_RECORD",
    )


async def operational_exception_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """Database unreachable or connection dropped."""
    logger.error(f"Database unavailable on {request.url.path}: {exc}", extra=_request_context(request))
    return create_error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Database temporarily unavailable. Please try again.",
        "DATABASE_UNAVAILABLE",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        extra=_request_context(request),
        exc_info=True,
    )
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        "INTERNAL_SERVER_ERROR",
    )


def register_exception_handlers(app) -> None:
    """Install every handler above on the FastAPI app."""
    handlers = {
        CarobarException: carobar_exception_handler,
        HTTPException: http_exception_handler,
        StarletteHTTPException: http_exception_handler,
        RequestValidationError: validation_exception_handler,
        ValidationError: validation_exception_handler,
        IntegrityError: integrity_exception_handler,
        OperationalError: operational_exception_handler,
        Exception: unhandled_exception_handler,
    }
    for exc_class, handler in handlers.items():
        app.add_exception_handler(exc_class, handler)
