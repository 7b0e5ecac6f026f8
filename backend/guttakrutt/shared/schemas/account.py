"""
Account Schemas

Site users (optionally linked to Battle.net), their claimed characters,
and the separate admin accounts.

User ↔ Character Links:
=======================
    users ──< user_characters >── characters
                 isMain     (at most one per user)
                 verified   (ownership confirmed through Battle.net)
"""

from datetime import datetime
from typing import Optional

from guttakrutt.shared.schemas.common import BaseSchema, RowSchema


class UserCreate(BaseSchema):
    """Fields accepted when registering a user."""

    username: str
    email: Optional[str] = None
    password: Optional[str] = None
    display_name: Optional[str] = None
    battle_net_id: Optional[str] = None
    battle_tag: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_expiry: Optional[datetime] = None
    is_guild_member: Optional[bool] = None
    is_officer: Optional[bool] = None
    region: Optional[str] = None
    locale: Optional[str] = None
    avatar_url: Optional[str] = None


class User(RowSchema):
    """Site user row."""

    username: str
    email: Optional[str] = None
    password: Optional[str] = None
    display_name: Optional[str] = None
    battle_net_id: Optional[str] = None
    battle_tag: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_expiry: Optional[datetime] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    is_guild_member: Optional[bool] = False
    is_officer: Optional[bool] = False
    region: Optional[str] = "eu"
    locale: Optional[str] = "en_GB"
    avatar_url: Optional[str] = None


class UserCharacter(RowSchema):
    """Link row between a user and a roster character."""

    user_id: int
    character_id: int
    is_main: Optional[bool] = False
    verified: Optional[bool] = False
    verified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class AdminUserCreate(BaseSchema):
    """Admin account; password must already be hashed."""

    username: str
    password: str


class AdminUser(RowSchema):
    username: str
    password: str
    last_login: Optional[datetime] = None
    last_updated: Optional[datetime] = None
