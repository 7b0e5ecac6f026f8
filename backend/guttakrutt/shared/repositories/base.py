"""
Base Repository

Generic per-entity CRUD on top of a SQLAlchemy Core table, written once
for both dialects.

What This Provides:
===================
- get(id)        → Fetch single row by id
- find()         → Rows with optional equality filters, ordering, paging
- count()        → Count rows with optional equality filters
- create(data)   → Insert and return the stored row
- update(id, d)  → Partial update, return the stored row
- delete(id)     → Hard delete, True/False

Dialect Boundary:
=================
┌─────────────────────────────────────────────────────────────────────────────┐
│                                                                             │
│   caller ── camelCase fields ──▶ BaseRepository                             │
│                                      │                                      │
│                         FieldNormalizer.to_storage_row()                    │
│                                      │                                      │
│                                      ▼                                      │
│                     RowWriter (ReturningWriter | ReselectWriter)            │
│                                      │   inside engine.begin()              │
│                                      ▼                                      │
│                                  database                                   │
│                                      │                                      │
│                        FieldNormalizer.from_storage_row()                   │
│                                      │                                      │
│   caller ◀── pydantic row model ─────┘                                      │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Subclasses never branch on the dialect: they build statements against
self.col("fieldName") and let the writer and normalizer do the rest.

Failure Semantics:
==================
    @read_operation(default)  → log a warning, return default (None, [], 0)
    @write_operation(name)    → log an error, raise StorageError from the cause

Reads degrade so a page keeps rendering when one query fails; writes
raise so the API can answer with a 500. RecordVerificationError and other
GuttakruttException subclasses raised inside a write pass through as-is.
"""

import functools
from typing import (
    Any,
    Awaitable,
    Callable,
    Generic,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import Table, func, select
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import ColumnElement, Select

from guttakrutt.shared.core.exceptions import GuttakruttException, StorageError
from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.db.normalizer import FieldNormalizer
from guttakrutt.shared.db.tables import GuildTables, build_tables
from guttakrutt.shared.repositories.writers import RowWriter
from guttakrutt.shared.schemas.common import RowSchema
from guttakrutt.shared.utils.clock import utcnow


logger = get_logger("guttakrutt.repositories")

SchemaType = TypeVar("SchemaType", bound=RowSchema)
ResultT = TypeVar("ResultT")

# Errors that count as "the database call failed"
DATABASE_ERRORS = (SQLAlchemyError, OSError, SchemaValidationError)

FieldData = Union[BaseModel, Mapping[str, Any]]


# ═══════════════════════════════════════════════════════════════════════════════
# FAILURE POLICY
# ═══════════════════════════════════════════════════════════════════════════════


def read_operation(
    default: Optional[Callable[[], Any]] = None,
) -> Callable[[Callable[..., Awaitable[ResultT]]], Callable[..., Awaitable[ResultT]]]:
    """
    Decorate a repository read so database errors degrade to a default.

    Args:
        default: Factory for the fallback value (list, int, bool);
            None means the method returns None on failure

    Example:
        @read_operation(list)
        async def get_by_guild_id(self, guild_id: int) -> list[Character]:
            ...
    """

    def decorator(func_: Callable[..., Awaitable[ResultT]]) -> Callable[..., Awaitable[ResultT]]:
        @functools.wraps(func_)
        async def wrapper(self: "BaseRepository", *args: Any, **kwargs: Any) -> ResultT:
            try:
                return await func_(self, *args, **kwargs)
            except DATABASE_ERRORS as exc:
                logger.warning(
                    "Read degraded to default",
                    entity=self.entity,
                    operation=func_.__name__,
                    dialect=self.dialect.value,
                    error=str(exc),
                )
                return default() if default is not None else None

        return wrapper

    return decorator


def write_operation(
    operation: str,
) -> Callable[[Callable[..., Awaitable[ResultT]]], Callable[..., Awaitable[ResultT]]]:
    """
    Decorate a repository write so database errors surface as StorageError.

    Args:
        operation: Verb used in the error message ("create", "update", ...)
    """

    def decorator(func_: Callable[..., Awaitable[ResultT]]) -> Callable[..., Awaitable[ResultT]]:
        @functools.wraps(func_)
        async def wrapper(self: "BaseRepository", *args: Any, **kwargs: Any) -> ResultT:
            try:
                return await func_(self, *args, **kwargs)
            except GuttakruttException:
                raise
            except DATABASE_ERRORS as exc:
                logger.error(
                    "Write failed",
                    entity=self.entity,
                    operation=operation,
                    dialect=self.dialect.value,
                    error=str(exc),
                )
                raise StorageError(operation, self.entity, cause=exc) from exc

        return wrapper

    return decorator


# ═══════════════════════════════════════════════════════════════════════════════
# BASE REPOSITORY
# ═══════════════════════════════════════════════════════════════════════════════


class BaseRepository(Generic[SchemaType]):
    """
    Generic base repository providing common CRUD operations.

    Subclasses set three class attributes:

        table_name  → attribute of GuildTables ("characters")
        schema      → pydantic row model (Character)
        entity      → name used in logs and error messages ("character")

    and optionally:

        touch_field → timestamp field stamped on every update ("lastUpdated")

    Attributes:
        engine: Shared async engine
        writer: Dialect write strategy, injected at startup
        dialect: The writer's dialect
        fields: FieldNormalizer for that dialect
        table: This repository's table
    """

    table_name: str
    schema: Type[SchemaType]
    entity: str = "record"
    touch_field: Optional[str] = "lastUpdated"

    def __init__(self, engine: AsyncEngine, writer: RowWriter) -> None:
        """
        Initialize the repository.

        Args:
            engine: Shared async engine from the Connection Resolver
            writer: Write strategy matching the engine's dialect
        """
        self.engine = engine
        self.writer = writer
        self.dialect = writer.dialect
        self.fields = FieldNormalizer(self.dialect)
        self.tables: GuildTables = build_tables(self.dialect)
        self.table: Table = getattr(self.tables, self.table_name)

    # ═══════════════════════════════════════════════════════════════════════════
    # ROW TRANSLATION
    # ═══════════════════════════════════════════════════════════════════════════

    def col(self, field: str, table: Optional[Table] = None) -> ColumnElement:
        """Column for a camelCase field on this (or another) table."""
        table = self.table if table is None else table
        return table.c[self.fields.column(field)]

    def to_schema(self, row: Optional[Mapping[str, Any]]) -> Optional[SchemaType]:
        """Turn a raw row into the row model, None passes through."""
        if row is None:
            return None
        return self.schema.model_validate(self.fields.from_storage_row(row))

    @staticmethod
    def to_fields(data: FieldData, *, partial: bool = False) -> dict[str, Any]:
        """
        camelCase fields from caller data.

        Pydantic models contribute their set fields (partial) or every
        non-None field (create). Mappings are taken as camelCase fields.
        """
        if isinstance(data, BaseModel):
            return data.model_dump(
                by_alias=True,
                exclude_unset=partial,
                exclude_none=not partial,
            )
        return dict(data)

    def to_values(self, data: FieldData, *, partial: bool) -> dict[str, Any]:
        """
        Turn caller data into column-keyed values for a write.

        "id" and fields this table does not have are dropped.
        """
        fields = self.to_fields(data, partial=partial)
        fields.pop("id", None)
        fields = self.prepare(fields)

        values = self.fields.to_storage_row(fields)
        unknown = [key for key in values if key not in self.table.c]
        if unknown:
            logger.debug("Dropping unknown fields", entity=self.entity, fields=unknown)
            for key in unknown:
                del values[key]
        return values

    def prepare(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook for per-entity coercion of camelCase fields before a write."""
        return fields

    async def fetch_one(self, statement: Select) -> Optional[RowMapping]:
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            return result.mappings().first()

    async def fetch_all(self, statement: Select) -> Sequence[RowMapping]:
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            return result.mappings().all()

    async def fetch_scalar(self, statement: Select) -> Any:
        async with self.engine.connect() as conn:
            result = await conn.execute(statement)
            return result.scalar()

    async def select_one(self, statement: Select) -> Optional[SchemaType]:
        return self.to_schema(await self.fetch_one(statement))

    async def select_many(self, statement: Select) -> list[SchemaType]:
        return [self.to_schema(row) for row in await self.fetch_all(statement)]

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    @read_operation()
    async def get(self, record_id: int) -> Optional[SchemaType]:
        """
        Get a single row by its id.

        Args:
            record_id: Primary key

        Returns:
            The row model if found, None if missing or on database error

        SQL Generated:
            SELECT * FROM characters WHERE id = 12
        """
        return await self.select_one(select(self.table).where(self.table.c.id == record_id))

    @read_operation(list)
    async def find(
        self,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        order_desc: bool = False,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> list[SchemaType]:
        """
        List rows with equality filters, ordering and paging.

        Args:
            filters: camelCase field → value, ANDed together
            order_by: camelCase field to sort by (id when omitted)
            order_desc: Sort descending
            offset: Rows to skip
            limit: Maximum rows, unlimited when None

        Returns:
            Row models; empty on database error

        SQL Generated:
            SELECT * FROM web_logs WHERE status = 'error'
            ORDER BY timestamp DESC LIMIT 100 OFFSET 0
        """
        statement = self.filtered(select(self.table), filters)
        order_column = self.col(order_by) if order_by else self.table.c.id
        statement = statement.order_by(order_column.desc() if order_desc else order_column.asc())
        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        return await self.select_many(statement)

    @read_operation(int)
    async def count(self, filters: Optional[Mapping[str, Any]] = None) -> int:
        """
        Count rows matching equality filters.

        SQL Generated:
            SELECT count(*) FROM characters WHERE guild_id = 1
        """
        statement = self.filtered(select(func.count()).select_from(self.table), filters)
        return int(await self.fetch_scalar(statement) or 0)

    def filtered(self, statement: Select, filters: Optional[Mapping[str, Any]]) -> Select:
        for field, value in (filters or {}).items():
            statement = statement.where(self.col(field) == value)
        return statement

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    @write_operation("create")
    async def create(self, data: FieldData) -> SchemaType:
        """
        Insert a row and return it as stored.

        Args:
            data: Create schema or camelCase field mapping

        Returns:
            Row model with the database-assigned id and defaults

        Raises:
            StorageError: The insert failed
            RecordVerificationError: The insert ran but the row was not found again
        """
        values = self.to_values(data, partial=False)
        async with self.engine.begin() as conn:
            row = await self.writer.insert(conn, self.table, values, entity=self.entity)
        logger.info("Row created", entity=self.entity, record_id=row["id"], dialect=self.dialect.value)
        return self.to_schema(row)

    @write_operation("update")
    async def update(self, record_id: int, data: FieldData) -> Optional[SchemaType]:
        """
        Apply a partial update and return the row as stored.

        Args:
            record_id: Primary key
            data: Fields to change; omitted fields stay as they are

        Returns:
            Updated row model, None if the row does not exist

        Raises:
            StorageError: The update failed
        """
        values = self.to_values(data, partial=True)
        if not values:
            return await self.get(record_id)
        if self.touch_field and self.fields.column(self.touch_field) in self.table.c:
            values.setdefault(self.fields.column(self.touch_field), utcnow())

        async with self.engine.begin() as conn:
            row = await self.writer.update(conn, self.table, record_id, values)
        if row is None:
            logger.info("Update target missing", entity=self.entity, record_id=record_id)
        return self.to_schema(row)

    @write_operation("delete")
    async def delete(self, record_id: int) -> bool:
        """
        Hard delete a row by id.

        Deleting a row that does not exist is a no-op returning False.

        Returns:
            True if a row was removed
        """
        async with self.engine.begin() as conn:
            deleted = await self.writer.delete(conn, self.table, record_id)
        logger.info("Row delete", entity=self.entity, record_id=record_id, deleted=deleted)
        return deleted

    async def set_exclusive_flag(
        self,
        flag_field: str,
        record_id: int,
        scope: Optional[Mapping[str, Any]] = None,
        target_field: str = "id",
    ) -> bool:
        """
        Make one row the only one in its scope with a boolean flag set.

        Runs a single UPDATE:

            UPDATE expansions SET is_active = (id = :target)
            UPDATE user_characters SET is_main = (character_id = :target)
             WHERE user_id = :user

        after checking, in the same transaction, that the target exists in
        the scope. A missing target leaves every row untouched.

        Args:
            flag_field: camelCase boolean field ("isMain")
            record_id: Value of target_field identifying the row to set
            scope: Equality filters bounding the group (None = whole table)
            target_field: Field compared against record_id

        Returns:
            True if the flag moved, False if the target is not in scope
        """
        target = self.col(target_field)
        exists_statement = self.filtered(
            select(func.count()).select_from(self.table).where(target == record_id),
            scope,
        )
        update_statement = self.table.update().values({self.fields.column(flag_field): target == record_id})
        for field, value in (scope or {}).items():
            update_statement = update_statement.where(self.col(field) == value)

        async with self.engine.begin() as conn:
            found = (await conn.execute(exists_statement)).scalar() or 0
            if not found:
                return False
            await conn.execute(update_statement)
        logger.info(
            "Exclusive flag moved",
            entity=self.entity,
            flag=flag_field,
            target=record_id,
            scope=dict(scope or {}),
        )
        return True
