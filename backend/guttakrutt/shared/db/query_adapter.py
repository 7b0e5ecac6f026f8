"""
Query Dialect Adapter

Lets a handful of raw SQL strings written for PostgreSQL run on MySQL.

Only two rewrites exist, applied only under MySQL:

    NOW()::date           →  DATE(NOW())
    <operand>::<type>     →  CAST(<operand> AS <mysql type>)

MySQL only accepts a few CAST targets, so the PostgreSQL type is mapped:

    text, varchar, char            →  CHAR
    int, integer, bigint, smallint →  SIGNED
    bool, boolean                  →  UNSIGNED
    numeric, decimal               →  DECIMAL
    json, jsonb                    →  JSON
    timestamp, timestamptz         →  DATETIME
    date                           →  DATE

A cast to any other type is dropped and the operand kept as-is.

An operand is an identifier (optionally table-qualified), a ":name" bind
parameter, a function call or parenthesised expression, or a literal.
Nothing else is translated. Raw queries passed through here must stick to
SQL both engines understand apart from these two constructs; the typed
query builder in the repositories covers everything else.

Usage:
======
    adapter = DialectQueryAdapter(engine, Dialect.MYSQL)
    rows = await adapter.query(
        "SELECT id FROM web_logs WHERE timestamp::date = NOW()::date"
    )
    # runs: SELECT id FROM web_logs WHERE CAST(timestamp AS DATE) = DATE(NOW())

    await adapter.end()
"""

import re
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, TypeVar, Union

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.db.dialect import Dialect


logger = get_logger("guttakrutt.db.adapter")

MYSQL_CAST_TYPES = {
    "text": "CHAR",
    "varchar": "CHAR",
    "char": "CHAR",
    "int": "SIGNED",
    "integer": "SIGNED",
    "bigint": "SIGNED",
    "smallint": "SIGNED",
    "bool": "UNSIGNED",
    "boolean": "UNSIGNED",
    "numeric": "DECIMAL",
    "decimal": "DECIMAL",
    "json": "JSON",
    "jsonb": "JSON",
    "timestamp": "DATETIME",
    "timestamptz": "DATETIME",
    "date": "DATE",
}

# NOW()::date must go first, the generic cast rule would otherwise turn it
# into CAST(NOW() AS DATE)
_NOW_DATE = re.compile(r"NOW\(\)::date\b", re.IGNORECASE)

_OPERAND = (
    r"(?<![\w:.])(?:"
    r":\w+"                                  # bind parameter
    r"|\w*\((?:[^()]|\([^()]*\))*\)"         # call or parenthesised expression
    r"|'(?:[^']|'')*'"                       # string literal
    r"|\d+(?:\.\d+)?"                        # number
    r"|[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*"      # identifier, maybe qualified
    r")"
)
_CAST = re.compile(rf"(?P<operand>{_OPERAND})::(?P<type>[A-Za-z_]\w*)\b")


def _cast(match: re.Match) -> str:
    operand, pg_type = match.group("operand"), match.group("type")
    mysql_type = MYSQL_CAST_TYPES.get(pg_type.lower())
    if mysql_type is None:
        logger.debug("Dropped cast without MySQL equivalent", pg_type=pg_type)
        return operand
    return f"CAST({operand} AS {mysql_type})"


@dataclass(frozen=True)
class RawQuery:
    """A SQL string with its bound parameters."""

    text: str
    params: dict[str, Any] = field(default_factory=dict)


QueryT = TypeVar("QueryT", str, RawQuery)


def rewrite_sql(sql: str) -> str:
    """Apply the two PostgreSQL → MySQL rewrites to a SQL string."""
    sql = _NOW_DATE.sub("DATE(NOW())", sql)
    return _CAST.sub(_cast, sql)


def adapt_query(query: QueryT, dialect: Dialect) -> QueryT:
    """
    Rewrite a query for the given dialect, keeping its shape.

    Args:
        query: SQL string or RawQuery
        dialect: Active dialect; PostgreSQL queries are returned untouched

    Returns:
        Same type as the input, rewritten when running on MySQL
    """
    sql = query.text if isinstance(query, RawQuery) else query

    if "::" in sql:
        logger.debug("Query with cast", sql=sql, dialect=dialect.value)

    if dialect is not Dialect.MYSQL:
        return query

    adapted = rewrite_sql(sql)
    if isinstance(query, RawQuery):
        return replace(query, text=adapted)
    return adapted


class DialectQueryAdapter:
    """
    Uniform query/end interface over either driver's pool.

    Attributes:
        engine: Shared async engine (the connection pool)
        dialect: Dialect the engine talks to
    """

    def __init__(self, engine: AsyncEngine, dialect: Dialect) -> None:
        self.engine = engine
        self.dialect = dialect

    async def query(
        self,
        sql: Union[str, RawQuery],
        params: Optional[Mapping[str, Any]] = None,
    ) -> list[dict[str, Any]]:
        """
        Run a raw SQL statement inside its own transaction.

        Args:
            sql: SQL string (":name" bind parameters) or RawQuery
            params: Bind parameters, merged over RawQuery.params

        Returns:
            Result rows as plain dicts keyed by column name; empty for
            statements that return no rows
        """
        adapted = adapt_query(sql, self.dialect)
        if isinstance(adapted, RawQuery):
            statement, bound = adapted.text, {**adapted.params, **(params or {})}
        else:
            statement, bound = adapted, dict(params or {})

        async with self.engine.begin() as conn:
            result = await conn.execute(text(statement), bound)
            if not result.returns_rows:
                return []
            return [dict(row) for row in result.mappings().all()]

    async def end(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
