"""
Exception Handlers for the FastAPI Application.

Every error leaves the API as ``{"error": <message>}``, the body shape the
frontend reads for its notifications:

- HTTP errors keep their status code and detail
- request validation failures become 400 with per-field details
- unique constraint violations become 409
- anything else becomes 500 with an error ID that is logged with full context
"""

import traceback
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from studentos.core.logging_config import get_logger
from studentos.core.monitoring import log_error

logger = get_logger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render an HTTP error as ``{"error": detail}``."""
    message = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and "endpoint" not in request.scope:
        # No route matched the path.
        message = "Not found"
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


def _validation_details(exc: RequestValidationError) -> List[Dict[str, str]]:
    details = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _LOCATION_PREFIXES:
            location = location[1:]
        message = str(error.get("msg", ""))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX) :]
        details.append({"field": ".".join(location), "message": message})
    return details


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 with the failing fields."""
    details = _validation_details(exc)
    logger.info(f"Validation failed for {request.method} {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "details": details},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Render a unique constraint violation as 409."""
    logger.warning(f"Integrity error in {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": "A record with this value already exists"},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context and returns a JSON response with an error ID
    that clients can use to reference the error when reporting issues.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with error details and error ID
    """
    error_id = id(exc)
    context: Dict[str, Any] = {
        "error_id": error_id,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client": request.client.host if request.client else "unknown",
        "error_type": type(exc).__name__,
    }

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={**context, "traceback": traceback.format_exc()},
    )
    log_error(type(exc).__name__, str(exc), context)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "errorId": error_id,
            "errorType": type(exc).__name__,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
