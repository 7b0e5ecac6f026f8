"""Pytest configuration for Guttakrutt persistence tests.

Repositories run against a throwaway aiosqlite file database. The
``dialect`` fixture is parametrised, so every test that touches storage
runs twice:

    postgres → camelCase columns, ReturningWriter (INSERT ... RETURNING)
    mysql    → snake_case columns, ReselectWriter (write, then re-select)
"""

import os

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("APP_ENV", "test")

from guttakrutt.shared.db import (  # noqa: E402
    DatabaseConnection,
    Dialect,
    DialectQueryAdapter,
    create_schema,
)
from guttakrutt.shared.storage import create_storage  # noqa: E402


@pytest.fixture(params=[Dialect.POSTGRES, Dialect.MYSQL], ids=["postgres", "mysql"])
def dialect(request):
    """Both dialects: column naming and write strategy."""
    return request.param


@pytest_asyncio.fixture
async def engine(tmp_path, dialect):
    """File-backed sqlite engine with the dialect's schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'guttakrutt.db'}")
    async with engine.begin() as conn:
        await create_schema(conn, dialect)
    yield engine
    await engine.dispose()


@pytest.fixture
def connection(engine, dialect):
    return DatabaseConnection(
        dialect=dialect,
        engine=engine,
        adapter=DialectQueryAdapter(engine, dialect),
    )


@pytest.fixture
def storage(connection):
    return create_storage(connection)


@pytest_asyncio.fixture
async def serial_storage(engine, dialect):
    """Second Storage on the same file, one pooled connection.

    sqlite refuses a second writer instead of queueing it, so concurrent
    writes are funnelled through a single connection.
    """
    serial_engine = create_async_engine(engine.url, pool_size=1, max_overflow=0)
    connection = DatabaseConnection(
        dialect=dialect,
        engine=serial_engine,
        adapter=DialectQueryAdapter(serial_engine, dialect),
    )
    yield create_storage(connection)
    await serial_engine.dispose()


@pytest_asyncio.fixture
async def broken_storage(tmp_path, dialect):
    """Storage whose database file can never be opened."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nowhere' / 'guttakrutt.db'}"
    )
    connection = DatabaseConnection(
        dialect=dialect,
        engine=engine,
        adapter=DialectQueryAdapter(engine, dialect),
    )
    yield create_storage(connection)
    await engine.dispose()


@pytest_asyncio.fixture
async def guild(storage):
    return await storage.create_guild(
        {
            "name": "Guttakrutt",
            "realm": "Tarren Mill",
            "faction": "Horde",
            "memberCount": 3,
        }
    )


@pytest.fixture
def character_data():
    """Factory for character field dicts."""

    def _create(guild_id: int, name: str, rank: int = 5, **fields):
        data = {
            "name": name,
            "className": "Mage",
            "specName": "Frost",
            "rank": rank,
            "level": 80,
            "guildId": guild_id,
            "realm": "Tarren Mill",
        }
        data.update(fields)
        return data

    return _create
