"""
Session Stores

Server-side storage for login sessions, keyed by session id.

    PostgreSQL  → PostgresSessionStore, table "session" (sid, sess, expire)
    MySQL       → MemorySessionStore, process-local dict pruned on a timer

Sessions on MySQL therefore do not survive a restart; that matches how
the site has always run there.

Store Interface:
================
    await store.start()                  create table / launch prune task
    await store.set(sid, data)           insert or replace, fresh expiry
    await store.get(sid)                 data dict, None if missing/expired
    await store.touch(sid)               push expiry forward
    await store.destroy(sid)             remove
    await store.prune()                  drop expired, returns count
    await store.stop()                   cancel prune task
"""

import asyncio
import contextlib
from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any, Optional

from sqlalchemy import JSON, Column, DateTime, MetaData, String, Table, delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncEngine

from guttakrutt.config.settings import settings
from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.db.dialect import Dialect
from guttakrutt.shared.utils.clock import utcnow


logger = get_logger("guttakrutt.sessions")

SessionData = dict[str, Any]


class SessionStore(ABC):
    """
    Base class for session stores.

    Attributes:
        max_age: Session lifetime applied on set() and touch()
    """

    def __init__(self, max_age: Optional[int] = None) -> None:
        self.max_age = timedelta(seconds=max_age or settings.SESSION_MAX_AGE_SECONDS)

    @abstractmethod
    async def get(self, sid: str) -> Optional[SessionData]:
        ...

    @abstractmethod
    async def set(self, sid: str, data: SessionData) -> None:
        ...

    @abstractmethod
    async def destroy(self, sid: str) -> None:
        ...

    @abstractmethod
    async def touch(self, sid: str) -> None:
        ...

    @abstractmethod
    async def prune(self) -> int:
        """Remove expired sessions; returns how many went."""

    async def start(self) -> None:
        """Prepare the store; called once during application startup."""

    async def stop(self) -> None:
        """Release resources; called once during application shutdown."""


class MemorySessionStore(SessionStore):
    """
    Process-local session store.

    Expired entries are ignored on read and removed by a background task
    every prune_interval seconds.
    """

    def __init__(self, max_age: Optional[int] = None, prune_interval: Optional[int] = None) -> None:
        super().__init__(max_age)
        self.prune_interval = prune_interval or settings.SESSION_PRUNE_INTERVAL_SECONDS
        self._sessions: dict[str, tuple[SessionData, Any]] = {}
        self._prune_task: Optional[asyncio.Task] = None

    async def get(self, sid: str) -> Optional[SessionData]:
        entry = self._sessions.get(sid)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at <= utcnow():
            self._sessions.pop(sid, None)
            return None
        return dict(data)

    async def set(self, sid: str, data: SessionData) -> None:
        self._sessions[sid] = (dict(data), utcnow() + self.max_age)

    async def destroy(self, sid: str) -> None:
        self._sessions.pop(sid, None)

    async def touch(self, sid: str) -> None:
        entry = self._sessions.get(sid)
        if entry is not None:
            self._sessions[sid] = (entry[0], utcnow() + self.max_age)

    async def prune(self) -> int:
        now = utcnow()
        expired = [sid for sid, (_, expires_at) in self._sessions.items() if expires_at <= now]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("Expired sessions pruned", store="memory", removed=len(expired))
        return len(expired)

    async def _prune_forever(self) -> None:
        while True:
            await asyncio.sleep(self.prune_interval)
            await self.prune()

    async def start(self) -> None:
        if self._prune_task is None:
            self._prune_task = asyncio.create_task(self._prune_forever())
            logger.info("Memory session store started", prune_interval=self.prune_interval)

    async def stop(self) -> None:
        if self._prune_task is not None:
            self._prune_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._prune_task
            self._prune_task = None


class PostgresSessionStore(SessionStore):
    """
    Session store backed by a database table.

    SQL Generated:
        INSERT INTO session (sid, sess, expire) VALUES (...)
        ON CONFLICT (sid) DO UPDATE SET sess = excluded.sess, expire = excluded.expire
    """

    def __init__(
        self,
        engine: AsyncEngine,
        table_name: Optional[str] = None,
        max_age: Optional[int] = None,
    ) -> None:
        super().__init__(max_age)
        self.engine = engine
        self.table = Table(
            table_name or settings.SESSION_TABLE_NAME,
            MetaData(),
            Column("sid", String(255), primary_key=True),
            Column("sess", JSON, nullable=False),
            Column("expire", DateTime, nullable=False, index=True),
        )

    def _upsert(self, sid: str, data: SessionData):
        # sqlite shares the ON CONFLICT syntax and backs the test suite
        dialect_insert = sqlite.insert if self.engine.dialect.name == "sqlite" else postgresql.insert
        statement = dialect_insert(self.table).values(sid=sid, sess=data, expire=utcnow() + self.max_age)
        return statement.on_conflict_do_update(
            index_elements=[self.table.c.sid],
            set_={"sess": statement.excluded.sess, "expire": statement.excluded.expire},
        )

    async def start(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(self.table.metadata.create_all)
        logger.info("Database session store ready", table=self.table.name)

    async def get(self, sid: str) -> Optional[SessionData]:
        statement = select(self.table.c.sess).where(
            self.table.c.sid == sid,
            self.table.c.expire > utcnow(),
        )
        async with self.engine.connect() as conn:
            return (await conn.execute(statement)).scalar()

    async def set(self, sid: str, data: SessionData) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(self._upsert(sid, data))

    async def destroy(self, sid: str) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(delete(self.table).where(self.table.c.sid == sid))

    async def touch(self, sid: str) -> None:
        async with self.engine.begin() as conn:
            await conn.execute(
                update(self.table)
                .where(self.table.c.sid == sid)
                .values(expire=utcnow() + self.max_age)
            )

    async def prune(self) -> int:
        async with self.engine.begin() as conn:
            result = await conn.execute(delete(self.table).where(self.table.c.expire <= utcnow()))
        removed = result.rowcount or 0
        if removed:
            logger.info("Expired sessions pruned", store="database", removed=removed)
        return removed


def make_session_store(dialect: Dialect, engine: AsyncEngine) -> SessionStore:
    """
    Pick the session store for a dialect.

    Args:
        dialect: Active dialect
        engine: Shared engine, used by the database store

    Returns:
        PostgresSessionStore on PostgreSQL, MemorySessionStore on MySQL
    """
    if dialect is Dialect.MYSQL:
        return MemorySessionStore()
    return PostgresSessionStore(engine)
