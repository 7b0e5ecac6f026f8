"""
Storage Dependency

FastAPI dependency handing route handlers the process-wide Storage.

The Storage is built once in the application lifespan and kept on
app.state; every request shares it (and its connection pool).

Usage:
======
    from guttakrutt.api.dependencies import StorageDep

    @router.get("/guild")
    async def get_guild(storage: StorageDep):
        return await storage.get_default_guild()

Tests replace it with a double:

    app.dependency_overrides[get_storage] = lambda: mock_storage
"""

from typing import Annotated

from fastapi import Depends, Request

from guttakrutt.shared.core.exceptions import DatabaseConnectionError
from guttakrutt.shared.storage import Storage


async def get_storage(request: Request) -> Storage:
    """
    FastAPI dependency for the shared Storage.

    Raises:
        DatabaseConnectionError: The lifespan never wired a Storage
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise DatabaseConnectionError("unknown", "Storage is not initialized")
    return storage


# Type alias for cleaner route signatures
StorageDep = Annotated[Storage, Depends(get_storage)]
