"""
Core Module

Provides core functionality shared across the application:
- Structured logging
- Custom exceptions

Usage:
======
    from guttakrutt.shared.core.logging import logger, get_logger
    from guttakrutt.shared.core.exceptions import StorageError, NotFoundError
"""

from guttakrutt.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
    set_log_dialect,
)
from guttakrutt.shared.core.exceptions import (
    GuttakruttException,
    DatabaseConnectionError,
    StorageError,
    RecordVerificationError,
    NotFoundError,
    ValidationError,
    ConflictError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    "set_log_dialect",
    # Exceptions
    "GuttakruttException",
    "DatabaseConnectionError",
    "StorageError",
    "RecordVerificationError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
]
