"""
Database Dialects

The two relational engines the guild site can be deployed on, and the
one place that decides which of them is active.

    DB_TYPE=mysql   → Dialect.MYSQL     (snake_case columns, no RETURNING)
    anything else   → Dialect.POSTGRES  (camelCase columns, native RETURNING)
"""

from enum import Enum
from typing import Optional

from guttakrutt.config.settings import Settings, settings as default_settings


class Dialect(str, Enum):
    """Active database engine for a deployment."""

    POSTGRES = "postgres"
    MYSQL = "mysql"

    @property
    def supports_returning(self) -> bool:
        return self is Dialect.POSTGRES


def resolve_dialect(settings: Optional[Settings] = None) -> Dialect:
    """
    Decide which dialect is active from the DB_TYPE setting.

    Args:
        settings: Settings to read, defaults to the process-wide instance

    Returns:
        Dialect.MYSQL when DB_TYPE is "mysql" (any case), Dialect.POSTGRES otherwise
    """
    settings = settings or default_settings
    return Dialect.MYSQL if settings.is_mysql else Dialect.POSTGRES
