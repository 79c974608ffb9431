"""Global error handling to map service errors to HTTP responses."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from payroll_api.config import get_settings
from payroll_api.exceptions import (
    ConflictError,
    NotFoundError,
    PayrollAPIError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Safe error messages that can be shown to users
SAFE_ERROR_MESSAGES = {
    400: "Invalid request",
    404: "Resource not found",
    405: "Method not allowed",
    409: "Conflict with existing resource",
    422: "Invalid input data",
    500: "Internal server error",
    503: "Service temporarily unavailable",
}


def _get_cors_headers(request: Request) -> dict[str, str]:
    """Get CORS headers for error responses.

    Exception handlers run before the CORS middleware can add headers, so
    allowed origins are echoed here.
    """
    origin = request.headers.get("origin")
    if origin and origin in get_settings().cors_origins_list:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


def status_code_for(exc: PayrollAPIError) -> int:
    """Get the HTTP status code for a service error."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def sanitize_validation_errors(errors: list[Any]) -> str:
    """Reduce request validation errors to field names and messages.

    Args:
        errors: Errors from ``RequestValidationError.errors()``

    Returns:
        Up to three "field: message" pairs
    """
    safe_errors = []
    for error in errors:
        if isinstance(error, dict):
            loc = error.get("loc", [])
            msg = error.get("msg", "Invalid value")
            # Only include field name, not detailed type information
            field = loc[-1] if loc else "field"
            if isinstance(field, str) and not field.startswith("_"):
                safe_errors.append(f"{field}: {msg}")
    if safe_errors:
        return "; ".join(safe_errors[:3])
    return SAFE_ERROR_MESSAGES[422]


async def payroll_exception_handler(request: Request, exc: PayrollAPIError) -> JSONResponse:
    """Handle service errors.

    Messages are composed by the service layer and safe to return.
    """
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"Unclassified service error for {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": SAFE_ERROR_MESSAGES[500]},
            headers=_get_cors_headers(request),
        )

    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, **({"context": exc.details} if exc.details else {})},
        headers=_get_cors_headers(request),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routes and the framework."""
    detail = exc.detail
    if not get_settings().debug and not isinstance(detail, str):
        detail = SAFE_ERROR_MESSAGES.get(exc.status_code, "Request failed")

    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail},
        headers=_get_cors_headers(request),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors with sanitized messages.

    Args:
        request: FastAPI request
        exc: Validation exception

    Returns:
        JSONResponse with sanitized error
    """
    logger.warning(f"Validation error for {request.url.path}: {len(exc.errors())} error(s)")

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": exc.errors()},
            headers=_get_cors_headers(request),
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": sanitize_validation_errors(exc.errors())},
        headers=_get_cors_headers(request),
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle SQLAlchemy exceptions without leaking database details.

    Args:
        request: FastAPI request
        exc: SQLAlchemy exception

    Returns:
        JSONResponse with safe error
    """
    logger.error(f"Database error for {request.url.path}: {type(exc).__name__}", exc_info=True)

    # Constraint violations that slipped past the service checks
    if isinstance(exc, IntegrityError):
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": SAFE_ERROR_MESSAGES[409]},
            headers=_get_cors_headers(request),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database error occurred"},
        headers=_get_cors_headers(request),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking information.

    Args:
        request: FastAPI request
        exc: Unexpected exception

    Returns:
        JSONResponse with generic error
    """
    logger.error(f"Unhandled exception for {request.url.path}: {exc}", exc_info=True)

    if get_settings().debug:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
            },
            headers=_get_cors_headers(request),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SAFE_ERROR_MESSAGES[500]},
        headers=_get_cors_headers(request),
    )
