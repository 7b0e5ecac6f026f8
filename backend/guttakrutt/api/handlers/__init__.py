"""
API Handlers

Route handlers for the Guttakrutt API.

Handlers follow the pattern:
- Parse HTTP requests
- Call Storage methods
- Format HTTP responses

Persistence rules (dialects, failure policy) live below the Storage.
"""

from guttakrutt.api.handlers import (
    guild_handler,
    health_handler,
    recruitment_handler,
)

__all__ = [
    "guild_handler",
    "health_handler",
    "recruitment_handler",
]
