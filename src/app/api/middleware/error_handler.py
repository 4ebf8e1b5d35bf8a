"""Global error handling.

All exceptions are converted to a standardized JSON body:
``error_code, message, user_message, suggestion, retry_allowed``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.core.errors import get_error
from app.core.exceptions import CategorizationError

logger = logging.getLogger(__name__)


def _error_body(error_code: str, message: str | None = None) -> dict:
    error_info = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or error_info["message"],
        "user_message": error_info["user_message"],
        "suggestion": error_info["suggestion"],
        "retry_allowed": error_info["retry_allowed"],
    }


async def handle_categorization_error(
    request: Request, exc: CategorizationError
) -> JSONResponse:
    """Handle application exceptions using the error catalog.

    Args:
        request: The incoming request
        exc: The application exception

    Returns:
        JSONResponse with error details from catalog
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    if exc.http_status >= 500:
        logger.error(f"Request failed: {exc.error_code}", extra=extra)
    else:
        logger.warning(f"Request rejected: {exc.error_code}", extra=extra)

    return JSONResponse(status_code=exc.http_status, content=_error_body(exc.error_code))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse with field-level messages joined into ``message``
    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("VAL_001", " | ".join(error_messages)),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors.

    str(exc) is never logged: it can include SQL and bound parameters.
    """
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        logger.exception(f"Database integrity error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=extra)

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "error_code": "DB_002",
                "message": "Resource already exists",
                "user_message": "This record already exists",
                "suggestion": "Please check if the record was already created",
                "retry_allowed": False,
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("DB_001"),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internal details."""
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "SYS_001",
            "message": "Internal server error",
            "user_message": "An unexpected error occurred",
            "suggestion": "Please try again later or contact support",
            "retry_allowed": True,
        },
    )
