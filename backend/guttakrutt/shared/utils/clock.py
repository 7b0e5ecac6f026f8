"""Timestamp helpers."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Current UTC time without tzinfo.

    Every timestamp column is a plain TIMESTAMP/DATETIME, which asyncpg and
    aiomysql both want naive.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
