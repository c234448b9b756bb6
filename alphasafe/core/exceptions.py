"""
Global exception handling for the application.
Every failure leaves the API as a (kind, message, field?) triple wrapped in
a standard error envelope.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""

    kind = "internal"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.field = field
        super().__init__(self.message)


class ValidationException(AppError):
    """Bad or missing field in a payload."""

    kind = "validation"

    def __init__(self, field: Optional[str], message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details, field=field)


class EntityNotFoundException(AppError):
    """Resource not found error."""

    kind = "not_found"

    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class UnauthorizedException(AppError):
    """Authentication failure error."""

    kind = "unauthorized"

    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ForbiddenException(AppError):
    """Authorization failure error."""

    kind = "forbidden"

    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class ConflictException(AppError):
    """State conflict (duplicates, dependent rows)."""

    kind = "conflict"

    def __init__(
        self,
        message: str = "Conflict",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_409_CONFLICT,
    ):
        super().__init__(message, status_code, details)


class DuplicateEmailException(ConflictException):
    """Registration or creation with an email that already exists."""

    def __init__(self, message: str = "Utilizador já existe", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.field = "email"


class EmailNotWhitelistedException(ConflictException):
    """Self-registration with an email outside the configured whitelist."""

    kind = "not_permitted"

    def __init__(self, message: str = "E-mail não autorizado para registo", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, status_code=status.HTTP_403_FORBIDDEN)
        self.field = "email"


class InternalException(AppError):
    """Unexpected persistence failure. The message never carries internals."""

    def __init__(self, message: str = "Erro interno do servidor", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


def _error_content(request: Request, code: str, kind: str, message: str, details=None, field=None) -> dict:
    error = {
        "code": code,
        "kind": kind,
        "message": message,
        "details": details or {},
        "path": request.url.path,
    }
    if field:
        error["field"] = field
    return {"error": error}


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/query validation errors with the same 400 envelope."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    # Drop the "body"/"query" prefix FastAPI puts in front of the field path
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or None
    message = first.get("msg", "Dados inválidos")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_content(request, "ValidationException", "validation", message, field=field),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_content(
                request,
                exc.__class__.__name__,
                exc.kind,
                exc.message,
                exc.details,
                exc.field,
            ),
        )

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(
            request,
            "InternalServerError",
            "internal",
            "An unexpected error occurred. Please try again later.",
        ),
    )
