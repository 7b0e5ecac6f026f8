"""
Web Log Repository

Append-only operational log (sync runs, API calls, admin actions) shown
on the admin dashboard.

Query Shape:
============
Every listing is "newest first, paged, optionally inside a time window"
plus at most one equality filter:

    get_logs(limit=100, offset=0, date_start=None, date_end=None)
    get_logs(..., filters={"operation": "raid_sync"})
    get_logs(..., filters={"status": "error"})
    get_logs(..., filters={"userId": 4})

count_logs() takes the same window and filter.
"""

from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.sql import Select

from guttakrutt.shared.core.exceptions import ValidationError
from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.repositories.base import (
    BaseRepository,
    read_operation,
    write_operation,
)
from guttakrutt.shared.schemas.site import WebLog
from guttakrutt.shared.utils.clock import utcnow


logger = get_logger("guttakrutt.repositories.web_logs")


class WebLogRepository(BaseRepository[WebLog]):
    """Repository for the web_logs table."""

    table_name = "web_logs"
    schema = WebLog
    entity = "web log"
    touch_field = None

    def _windowed(
        self,
        statement: Select,
        date_start: Optional[datetime],
        date_end: Optional[datetime],
        filters: Optional[Mapping[str, Any]],
    ) -> Select:
        timestamp = self.col("timestamp")
        if date_start is not None:
            statement = statement.where(timestamp >= date_start)
        if date_end is not None:
            statement = statement.where(timestamp <= date_end)
        return self.filtered(statement, filters)

    @read_operation(list)
    async def get_logs(
        self,
        limit: int = 100,
        offset: int = 0,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> list[WebLog]:
        """
        Log rows, newest first.

        Args:
            limit: Rows per page
            offset: Rows to skip
            date_start: Inclusive lower bound on timestamp
            date_end: Inclusive upper bound on timestamp
            filters: Extra camelCase equality filters

        SQL Generated:
            SELECT * FROM web_logs
            WHERE timestamp >= :start AND timestamp <= :end AND status = 'error'
            ORDER BY timestamp DESC, id DESC LIMIT 100 OFFSET 0
        """
        statement = self._windowed(select(self.table), date_start, date_end, filters)
        statement = (
            statement.order_by(self.col("timestamp").desc(), self.table.c.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return await self.select_many(statement)

    @read_operation(int)
    async def count_logs(
        self,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> int:
        statement = self._windowed(
            select(func.count()).select_from(self.table), date_start, date_end, filters
        )
        return int(await self.fetch_scalar(statement) or 0)

    @write_operation("delete")
    async def delete_older_than(self, days: int) -> int:
        """
        Remove log rows older than a number of days.

        Args:
            days: Age threshold; rows with timestamp before now - days go

        Returns:
            Number of rows removed

        Raises:
            ValidationError: Negative retention
        """
        if days < 0:
            raise ValidationError("Retention must be zero or more days", details={"days": days})
        cutoff = utcnow() - timedelta(days=days)
        async with self.engine.begin() as conn:
            result = await conn.execute(delete(self.table).where(self.col("timestamp") < cutoff))
        removed = result.rowcount or 0
        logger.info("Old web logs removed", days=days, removed=removed)
        return removed
