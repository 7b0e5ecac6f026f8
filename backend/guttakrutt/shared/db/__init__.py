"""
Database Module

Dialect resolution, the shared connection pool, raw-SQL adaptation and
the per-dialect table definitions.

Architecture Overview:
======================
┌─────────────────────────────────────────────────────────────────────────────┐
│                        DATABASE LAYER                                       │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   DB_TYPE ──▶ resolve_dialect() ──▶ Dialect.POSTGRES | Dialect.MYSQL        │
│                                         │                                   │
│                                         ▼                                   │
│   get_connection() ──▶ DatabaseConnection(dialect, engine, adapter)         │
│                                         │                                   │
│              ┌──────────────────────────┼──────────────────────────┐        │
│              ▼                          ▼                          ▼        │
│      build_tables(dialect)     DialectQueryAdapter        FieldNormalizer   │
│      Core tables, column       raw SQL, Postgres-only     camelCase fields  │
│      names per dialect         syntax rewritten           ↔ column names    │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Components:
===========
- dialect.py: Dialect enum and DB_TYPE resolution
- connection.py: Engine creation, memoized connection, lifecycle functions
- query_adapter.py: PostgreSQL → MySQL raw SQL rewriting
- normalizer.py: Field ↔ column mapping and boolean coercion
- tables.py: SQLAlchemy Core tables built per dialect
"""

from guttakrutt.shared.db.dialect import Dialect, resolve_dialect
from guttakrutt.shared.db.connection import (
    DatabaseConnection,
    build_database_url,
    close_db,
    create_connection,
    get_connection,
    init_db,
    set_connection,
)
from guttakrutt.shared.db.query_adapter import DialectQueryAdapter, RawQuery, adapt_query
from guttakrutt.shared.db.normalizer import (
    FieldNormalizer,
    column_name,
    field_name,
    from_storage_row,
    to_storage_row,
)
from guttakrutt.shared.db.tables import GuildTables, build_tables, create_schema

__all__ = [
    # Dialect
    "Dialect",
    "resolve_dialect",
    # Connection lifecycle
    "DatabaseConnection",
    "build_database_url",
    "create_connection",
    "get_connection",
    "set_connection",
    "init_db",
    "close_db",
    # Query adapter
    "DialectQueryAdapter",
    "RawQuery",
    "adapt_query",
    # Field normalizer
    "FieldNormalizer",
    "column_name",
    "field_name",
    "to_storage_row",
    "from_storage_row",
    # Tables
    "GuildTables",
    "build_tables",
    "create_schema",
]
