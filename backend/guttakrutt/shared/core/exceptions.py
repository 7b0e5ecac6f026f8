"""
Custom Exceptions

Application-specific exceptions with HTTP status codes and error codes.

Exception Hierarchy:
====================
    GuttakruttException (base)
       │
       ├── DatabaseConnectionError (503)  ← Dialect/pool resolution or startup probe failed
       ├── StorageError (500)             ← A write failed at the repository boundary
       │      └── RecordVerificationError ← Write went through, re-fetch found nothing
       ├── NotFoundError (404)            ← Resource not found
       ├── ValidationError (400)          ← Invalid input data
       └── ConflictError (409)            ← Resource already exists / owned elsewhere

Read vs Write Failures:
=======================
Repository reads never raise: they log and return None / [] / 0.
Repository writes raise StorageError so the caller can answer with a 500.
RecordVerificationError lets callers tell "the write itself failed"
apart from "the write succeeded but the row could not be read back".

Usage:
======
    from guttakrutt.shared.core.exceptions import StorageError, NotFoundError

    raise NotFoundError("Application", application_id)
    # {"error": {"code": "NOT_FOUND", "message": "Application with id '7' not found"}}
"""

from typing import Any, Optional


class GuttakruttException(Exception):
    """
    Base exception for all Guttakrutt application errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# DATABASE ERRORS (500, 503)
# ═══════════════════════════════════════════════════════════════════════════════


class DatabaseConnectionError(GuttakruttException):
    """
    Database unavailable at startup (503 Service Unavailable).

    Raised by init_db() when the configured dialect cannot be reached.
    Not retried: the process is expected to exit.
    """

    def __init__(
        self,
        dialect: str,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        extra_details = details or {}
        extra_details["dialect"] = dialect
        super().__init__(
            message=message or f"Could not connect to {dialect} database",
            status_code=503,
            error_code="DATABASE_UNAVAILABLE",
            details=extra_details,
        )


class StorageError(GuttakruttException):
    """
    Write operation failed (500 Internal Server Error).

    Example:
        raise StorageError("create", "character", cause=exc)
        # Message: "Failed to create character"
    """

    def __init__(
        self,
        operation: str,
        entity: str,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
        error_code: str = "STORAGE_ERROR",
    ) -> None:
        self.operation = operation
        self.entity = entity
        details: dict[str, Any] = {"operation": operation, "entity": entity}
        if cause is not None:
            details["reason"] = str(cause)
        super().__init__(
            message=message or f"Failed to {operation} {entity}",
            status_code=500,
            error_code=error_code,
            details=details,
        )


class RecordVerificationError(StorageError):
    """
    The write succeeded but the row could not be read back.

    Only reachable on the re-select path (MySQL), where the inserted or
    updated row is fetched again by its id inside the same transaction.
    """

    def __init__(self, operation: str, entity: str, record_id: Any = None) -> None:
        super().__init__(
            operation=operation,
            entity=entity,
            message=f"Failed to find {entity} after {operation}",
            error_code="VERIFICATION_FAILED",
        )
        if record_id is not None:
            self.details["record_id"] = record_id


# ═══════════════════════════════════════════════════════════════════════════════
# NOT FOUND ERRORS (404)
# ═══════════════════════════════════════════════════════════════════════════════


class NotFoundError(GuttakruttException):
    """
    Resource not found error (404 Not Found).

    Example:
        raise NotFoundError("Application", 12)
        # Message: "Application with id '12' not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND",
            details=details,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# VALIDATION & CONFLICT ERRORS (400, 409)
# ═══════════════════════════════════════════════════════════════════════════════


class ValidationError(GuttakruttException):
    """Validation error (400 Bad Request)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class ConflictError(GuttakruttException):
    """
    Resource conflict error (409 Conflict).

    Example:
        raise ConflictError("Battle.net account already linked to another user")
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )
