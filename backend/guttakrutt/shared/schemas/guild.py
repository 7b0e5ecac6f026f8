"""
Guild & Roster Schemas

One guild row is the root of the site; characters hang off it by guildId.

Sample Character Row (camelCase fields):
========================================
┌────┬──────────┬───────────┬──────┬───────────┬─────────┬───────────────┐
│ id │ name     │ className │ rank │ itemLevel │ guildId │ raiderIoScore │
├────┼──────────┼───────────┼──────┼───────────┼─────────┼───────────────┤
│ 12 │ Truedps  │ Mage      │ 3    │ 639       │ 1       │ 3105          │
│ 13 │ Oldalt   │ Priest    │ 99   │ 610       │ 1       │ 0             │  ← left roster
└────┴──────────┴───────────┴──────┴───────────┴─────────┴───────────────┘
"""

from datetime import datetime
from typing import Any, Optional

from guttakrutt.shared.schemas.common import BaseSchema, RowSchema


class GuildCreate(BaseSchema):
    """Fields accepted when creating a guild."""

    name: str
    realm: str
    faction: str
    description: Optional[str] = None
    member_count: Optional[int] = None
    emblem_url: Optional[str] = None
    server_region: Optional[str] = None


class Guild(RowSchema):
    """Guild row."""

    name: str
    realm: str
    faction: str
    description: Optional[str] = None
    member_count: Optional[int] = None
    last_updated: Optional[datetime] = None
    emblem_url: Optional[str] = None
    server_region: Optional[str] = "eu"


class CharacterCreate(BaseSchema):
    """Fields accepted when creating a roster character."""

    name: str
    class_name: str
    rank: int
    level: int
    guild_id: int
    spec_name: Optional[str] = None
    avatar_url: Optional[str] = None
    item_level: Optional[int] = None
    blizzard_id: Optional[str] = None
    realm: Optional[str] = None
    role: Optional[str] = None
    raid_participation: Optional[Any] = None
    # Accepts the API's float or a numeric string; stored rounded
    raider_io_score: Optional[Any] = None
    last_active: Optional[datetime] = None
    armory_link: Optional[str] = None


class Character(RowSchema):
    """Roster character row."""

    name: str
    class_name: str
    spec_name: Optional[str] = None
    rank: int
    level: int
    avatar_url: Optional[str] = None
    item_level: Optional[int] = None
    guild_id: int
    blizzard_id: Optional[str] = None
    realm: Optional[str] = None
    role: Optional[str] = None
    raid_participation: Optional[Any] = None
    raider_io_score: Optional[int] = None
    last_active: Optional[datetime] = None
    armory_link: Optional[str] = None
    last_updated: Optional[datetime] = None


class LinkedCharacter(Character):
    """A character as seen through a user's link to it."""

    is_main: bool = False
    verified: bool = False
