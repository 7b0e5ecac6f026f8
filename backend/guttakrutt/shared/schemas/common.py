"""
Common Schemas

Shared base classes and API envelopes.

Field Naming:
=============
Python attributes are snake_case, the wire/storage field names are the
camelCase aliases generated from them:

    class Guild(RowSchema):
        member_count: Optional[int] = None      # field "memberCount"

    Guild.model_validate({"id": 1, "memberCount": 30, ...})
    guild.model_dump(by_alias=True)             # {"memberCount": 30, ...}

Repositories speak camelCase fields only (see db/normalizer.py), so every
schema here round-trips through the alias.

Schema Types:
=============
- BaseSchema: camelCase aliases, populate by either name
- RowSchema: persisted row, always has a database-assigned id
- ErrorResponse, HealthResponse
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Provides:
    - alias_generator: camelCase field names on the wire and in storage
    - populate_by_name: allow snake_case attribute names as input too
    - from_attributes: allow building from attribute-style objects
    - use_enum_values: enums are stored as their plain string values
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        validate_default=True,
    )


class RowSchema(BaseSchema):
    """A persisted row with its database-assigned id."""

    id: int


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    Example:
        {
            "error": {
                "code": "STORAGE_ERROR",
                "message": "Failed to create application",
                "details": {"operation": "create", "entity": "application"}
            }
        }
    """

    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "guttakrutt"
    version: str = "1.0.0"
    dialect: Optional[str] = None
    database: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
