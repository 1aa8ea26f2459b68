"""Error Handlers — global exception handlers for the Task Board API.

Invariants:
    - TaskBoardError → structured JSON with error code, message, severity
    - RequestValidationError → FieldValidationError (400) with field-level details;
      message names the first field problem
    - Exception (catch-all) → 500, never leaks internal details
    - StorageError detail logged server-side, never returned

Design Decisions:
    - Three-layer handler: domain (TaskBoardError), validation (Pydantic), catch-all (Exception)
    - 4xx domain errors logged at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from taskboard.core.errors import (
    TaskBoardError, FieldValidationError, StorageError, ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_taskboard_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_taskboard_error_handler(app: FastAPI) -> None:
    """Register Task Board domain/infrastructure error handler."""

    @app.exception_handler(TaskBoardError)
    async def taskboard_error_handler(request: Request, exc: TaskBoardError):
        """Handle all Task Board domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "user_id": exc.context.user_id,
        }
        if isinstance(exc, StorageError):
            logger.error(
                f"StorageError during {exc.operation}: {exc.detail}",
                extra={**extra, "operation": exc.operation},
            )
        elif exc.http_status >= 500:
            logger.error(f"TaskBoardError: {exc.message}", extra=extra)
        else:
            logger.warning(f"TaskBoardError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
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
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        error = _to_field_error(exc)
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "Internal server error",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _to_field_error(exc: RequestValidationError) -> FieldValidationError:
    """Collapse pydantic errors into one FieldValidationError."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    if not details:
        return FieldValidationError("Invalid request data", "")
    first = details[0]
    if first["type"] == "required_text":
        message = first["message"]
    elif first["field"]:
        message = f"{first['field']}: {first['message']}"
    else:
        message = first["message"]
    return FieldValidationError(message, first["field"], details=details)
