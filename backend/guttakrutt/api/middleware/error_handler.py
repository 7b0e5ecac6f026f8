"""
Error Handler Middleware

Turns every failure that reaches the API into the same JSON envelope.

Error Response Format:
======================
    {
        "error": {
            "code": "STORAGE_ERROR",
            "message": "Failed to create application",
            "details": {"operation": "create", "entity": "application", "reason": "..."}
        }
    }

Mapping:
========
    GuttakruttException          its own status_code / error_code
      StorageError                 500  STORAGE_ERROR      (failed write)
      RecordVerificationError      500  VERIFICATION_FAILED
      NotFoundError                404  NOT_FOUND
      DatabaseConnectionError      503  DATABASE_UNAVAILABLE
    RequestValidationError       422  VALIDATION_ERROR   (bad body / query)
    pydantic ValidationError     400  VALIDATION_ERROR   (bad row or payload)
    sqlalchemy DBAPIError        503  DATABASE_UNAVAILABLE (escaped the repositories)
    anything else                500  INTERNAL_ERROR     (details hidden)

Degraded reads never get here: the repositories already turned them into
empty results.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError

from guttakrutt.shared.core.exceptions import GuttakruttException
from guttakrutt.shared.core.logging import logger
from guttakrutt.shared.schemas.common import ErrorDetail, ErrorResponse


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    """Build the standard error envelope."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(GuttakruttException)
    async def guttakrutt_exception_handler(
        request: Request,
        exc: GuttakruttException,
    ) -> JSONResponse:
        # Failed writes are server-side, missing rows are the caller's
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Request failed",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]
        logger.info("Rejected request", path=request.url.path, errors=len(errors))
        return error_response(422, "VALIDATION_ERROR", "Request validation failed", {"errors": errors})

    @app.exception_handler(ValidationError)
    async def row_validation_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """A payload or stored row that does not fit its schema."""
        errors = exc.errors(include_url=False, include_context=False)
        logger.warning("Schema validation failed", model=exc.title, path=request.url.path)
        return error_response(400, "VALIDATION_ERROR", f"Invalid {exc.title}", {"errors": errors})

    @app.exception_handler(DBAPIError)
    async def database_error_handler(
        request: Request,
        exc: DBAPIError,
    ) -> JSONResponse:
        """Driver errors raised outside a repository operation."""
        storage = getattr(request.app.state, "storage", None)
        dialect_name = storage.dialect.value if storage is not None else "unknown"
        logger.error(
            "Database error",
            dialect=dialect_name,
            error=str(exc.orig),
            path=request.url.path,
        )
        return error_response(
            503,
            "DATABASE_UNAVAILABLE",
            f"Database unavailable ({dialect_name})",
            {"dialect": dialect_name},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Full details go to the log, never to the client."""
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")
