"""
Logging Configuration

Structured logging with structlog. One configuration for the whole
process, set up when this module is first imported.

Log Output:
===========
Development:
    2025-01-15 10:30:00 [warning  ] Read degraded to default   dialect=mysql entity=raid_boss operation=get_by_guild_id

Production (JSON):
    {"timestamp": "2025-01-15T10:30:00Z", "level": "error", "event": "Write failed", "dialect": "postgres", "entity": "character"}

Conventions:
============
The persistence layer logs boundary events with a fixed set of keys so
log queries work the same on both dialects:

    entity      → "guild", "character", "raid_boss", ...
    operation   → "create", "update", "delete", "get_by_guild_id", ...
    dialect     → "postgres" | "mysql"  (added to every line once resolved)
    record_id   → primary key when one is known
    error       → str(exc) for failures
    request_id  → bound per request by the API middleware

Usage:
======
    from guttakrutt.shared.core.logging import logger, get_logger

    logger.info("Guild created", guild_id=guild.id, realm=guild.realm)

    repo_logger = get_logger("guttakrutt.repositories")
    repo_logger.warning("Read degraded to default", entity="raid_boss", operation="list")
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from guttakrutt.config.settings import settings


# Driver and pool loggers stay quiet unless DEBUG echoes SQL anyway
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg", "aiomysql")

_active_dialect: Optional[str] = None


def set_log_dialect(dialect: Optional[str]) -> None:
    """Stamp every following log line with the resolved dialect."""
    global _active_dialect
    _active_dialect = dialect


def add_dialect(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    if _active_dialect is not None:
        event_dict.setdefault("dialect", _active_dialect)
    return event_dict


def setup_logging() -> None:
    """
    Configure structlog on top of the stdlib root logger.

    Development renders colored console lines, every other environment
    renders one JSON object per line.
    """
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_dialect,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_development:
        renderer: Processor = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
        processors = shared_processors + [renderer]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Bind key/values to every log line of the current task (request)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("guttakrutt")
