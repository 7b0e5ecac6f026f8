"""
Session Stores

    from guttakrutt.shared.sessions import make_session_store

    store = make_session_store(connection.dialect, connection.engine)
    await store.start()
"""

from guttakrutt.shared.sessions.store import (
    MemorySessionStore,
    PostgresSessionStore,
    SessionStore,
    make_session_store,
)

__all__ = [
    "SessionStore",
    "MemorySessionStore",
    "PostgresSessionStore",
    "make_session_store",
]
