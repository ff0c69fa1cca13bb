"""Error Handlers — global exception handlers for the Weeklist API.

Invariants:
    - WeeklistError → {message, data: null, error: {code, category, severity, timestamp}}
    - RequestValidationError → same envelope with field-level details
    - Exception (catch-all) → "Something went wrong!", never leaks internal details
    - Unmatched route → 404 {"message": "Page not found!"}
    - legacy_status_codes=True → every error envelope is sent with HTTP 200

Design Decisions:
    - Four-layer handler: domain (WeeklistError), validation (Pydantic),
      routing (Starlette HTTPException), catch-all (Exception)
    - Legacy flag read per request: toggling it needs no app rebuild
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.core.errors import (
    GENERIC_FAILURE_MESSAGE, ErrorCategory, ErrorSeverity, WeeklistError,
)

logger = logging.getLogger(__name__)

PAGE_NOT_FOUND_MESSAGE = "Page not found!"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_weeklist_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _status(http_status: int) -> int:
    return status.HTTP_200_OK if get_settings().legacy_status_codes else http_status


def _register_weeklist_error_handler(app: FastAPI) -> None:
    """Register Weeklist domain/infrastructure error handler."""

    @app.exception_handler(WeeklistError)
    async def weeklist_error_handler(request: Request, exc: WeeklistError):
        """Handle all Weeklist domain/infrastructure errors."""
        extra = {**exc.log_extra(), "path": request.url.path}
        if exc.severity == ErrorSeverity.CRITICAL:
            logger.error(f"WeeklistError: {getattr(exc, 'detail', exc.message)}", extra=extra)
        else:
            logger.warning(f"WeeklistError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=_status(exc.http_status), content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=_status(status.HTTP_400_BAD_REQUEST),
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing-level HTTP error handler (unknown paths, wrong methods)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = PAGE_NOT_FOUND_MESSAGE
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=_status(status.HTTP_500_INTERNAL_SERVER_ERROR),
            content={
                "message": GENERIC_FAILURE_MESSAGE,
                "data": None,
                "error": {
                    "code": "INTERNAL_ERROR",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "message": "Invalid request data",
        "data": None,
        "error": {
            "code": "VALIDATION_ERROR",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
