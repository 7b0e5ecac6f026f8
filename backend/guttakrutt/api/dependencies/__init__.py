"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Storage: get_storage(), StorageDep

Usage:
======
    from guttakrutt.api.dependencies import StorageDep

    @router.get("/roster")
    async def get_roster(storage: StorageDep):
        ...
"""

from guttakrutt.api.dependencies.storage import (
    StorageDep,
    get_storage,
)

__all__ = [
    "get_storage",
    "StorageDep",
]
