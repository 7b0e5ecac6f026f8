"""
Shared Module

Contains the dual-dialect persistence layer and everything it leans on:
- DB: connection resolver, dialect query adapter, field normalizer, tables
- Repositories: per-entity data access with pluggable write strategies
- Schemas: Pydantic row models (snake_case attributes, camelCase aliases)
- Sessions: dialect-appropriate session stores
- Core: Logging, exceptions

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Connection, dialect adapter, normalizer, tables
    ├── repositories/   ← Data access layer
    ├── schemas/        ← Pydantic schemas
    ├── sessions/       ← Session stores
    ├── utils/          ← Score coercion, password hashing
    └── storage.py      ← Storage facade consumed by the API

Usage:
======
    from guttakrutt.shared.db import get_connection
    from guttakrutt.shared.storage import create_storage

    storage = create_storage(get_connection())
    guild = await storage.get_default_guild()
"""
