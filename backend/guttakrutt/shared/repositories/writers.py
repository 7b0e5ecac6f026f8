"""
Write Strategies

How a mutating statement hands back the row it touched. This is the only
place in the repository layer where the two dialects behave differently.

    ReturningWriter (PostgreSQL)
        INSERT ... RETURNING *            one statement
        UPDATE ... WHERE id = :id RETURNING *
        DELETE ... WHERE id = :id RETURNING id

    ReselectWriter (MySQL)
        INSERT ...                        then SELECT * WHERE id = <driver lastrowid>
        UPDATE ... WHERE id = :id         then SELECT * WHERE id = :id
        DELETE ... WHERE id = :id         affected row count decides the result

Every method takes an open connection. Repositories call them inside
engine.begin(), so the write and its re-select share one transaction and
no other writer can slip in between the two statements.

The re-select is always by primary key. A row is never looked up again
by a non-unique column such as a boss name.

Usage:
======
    writer = make_writer(Dialect.MYSQL)
    async with engine.begin() as conn:
        row = await writer.insert(conn, tables.raid_bosses, values, entity="raid boss")
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncConnection

from guttakrutt.shared.core.exceptions import RecordVerificationError
from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.db.dialect import Dialect


logger = get_logger("guttakrutt.repositories.writers")


class RowWriter(ABC):
    """
    Strategy interface for mutating one row by primary key.

    Attributes:
        dialect: Dialect this strategy is written for
    """

    dialect: Dialect

    @abstractmethod
    async def insert(
        self,
        conn: AsyncConnection,
        table: Table,
        values: Mapping[str, Any],
        *,
        entity: str,
    ) -> RowMapping:
        """
        Insert one row and return it as stored.

        Raises:
            RecordVerificationError: The row could not be read back
        """

    @abstractmethod
    async def update(
        self,
        conn: AsyncConnection,
        table: Table,
        record_id: int,
        values: Mapping[str, Any],
    ) -> Optional[RowMapping]:
        """Update one row by id; None when no such row exists."""

    @abstractmethod
    async def delete(self, conn: AsyncConnection, table: Table, record_id: int) -> bool:
        """Delete one row by id; False when no such row exists."""


class ReturningWriter(RowWriter):
    """Native RETURNING, one statement per write."""

    dialect = Dialect.POSTGRES

    async def insert(self, conn, table, values, *, entity):
        result = await conn.execute(insert(table).values(dict(values)).returning(*table.c))
        row = result.mappings().first()
        if row is None:
            raise RecordVerificationError("create", entity)
        return row

    async def update(self, conn, table, record_id, values):
        result = await conn.execute(
            update(table)
            .where(table.c.id == record_id)
            .values(dict(values))
            .returning(*table.c)
        )
        return result.mappings().first()

    async def delete(self, conn, table, record_id):
        result = await conn.execute(
            delete(table).where(table.c.id == record_id).returning(table.c.id)
        )
        return result.first() is not None


class ReselectWriter(RowWriter):
    """Write, then fetch the row again by primary key in the same transaction."""

    dialect = Dialect.MYSQL

    async def _fetch(self, conn: AsyncConnection, table: Table, record_id: Any) -> Optional[RowMapping]:
        result = await conn.execute(select(table).where(table.c.id == record_id))
        return result.mappings().first()

    async def insert(self, conn, table, values, *, entity):
        result = await conn.execute(insert(table).values(dict(values)))

        primary_key = result.inserted_primary_key
        new_id = primary_key[0] if primary_key else None
        if new_id is None:
            logger.error("Insert reported no id", table=table.name)
            raise RecordVerificationError("create", entity)

        row = await self._fetch(conn, table, new_id)
        if row is None:
            logger.error("Inserted row not found on re-select", table=table.name, record_id=new_id)
            raise RecordVerificationError("create", entity, record_id=new_id)
        return row

    async def update(self, conn, table, record_id, values):
        await conn.execute(update(table).where(table.c.id == record_id).values(dict(values)))
        return await self._fetch(conn, table, record_id)

    async def delete(self, conn, table, record_id):
        result = await conn.execute(delete(table).where(table.c.id == record_id))
        return (result.rowcount or 0) > 0


def make_writer(dialect: Dialect) -> RowWriter:
    """
    Pick the write strategy for a dialect.

    Args:
        dialect: Active dialect

    Returns:
        ReturningWriter for PostgreSQL, ReselectWriter for MySQL
    """
    if dialect.supports_returning:
        return ReturningWriter()
    return ReselectWriter()
