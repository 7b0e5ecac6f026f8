"""
Raid Schemas

Progress summaries, individual bosses, and the expansion/tier reference
data they are filed under.
"""

from datetime import datetime
from typing import Any, Optional

from guttakrutt.shared.schemas.common import BaseSchema, RowSchema
from guttakrutt.shared.schemas.enums import Difficulty


# ═══════════════════════════════════════════════════════════════════════════════
# RAID PROGRESS
# ═══════════════════════════════════════════════════════════════════════════════


class RaidProgressCreate(BaseSchema):
    """Fields accepted when recording raid progress."""

    name: str
    bosses: int
    bosses_defeated: int
    difficulty: Difficulty
    guild_id: int
    world_rank: Optional[int] = None
    region_rank: Optional[int] = None
    realm_rank: Optional[int] = None
    tier_id: Optional[int] = None
    is_current_tier: Optional[bool] = None


class RaidProgress(RowSchema):
    """Per-raid, per-difficulty progress summary."""

    name: str
    bosses: int
    bosses_defeated: int
    difficulty: str
    guild_id: int
    world_rank: Optional[int] = None
    region_rank: Optional[int] = None
    realm_rank: Optional[int] = None
    tier_id: Optional[int] = None
    is_current_tier: Optional[bool] = False
    last_updated: Optional[datetime] = None


# ═══════════════════════════════════════════════════════════════════════════════
# RAID BOSSES
# ═══════════════════════════════════════════════════════════════════════════════


class RaidBossCreate(BaseSchema):
    """Fields accepted when creating a raid boss."""

    name: str
    raid_name: str
    guild_id: int
    difficulty: Difficulty = Difficulty.MYTHIC
    icon_url: Optional[str] = None
    best_time: Optional[str] = None
    best_parse: Optional[str] = None
    pull_count: Optional[int] = None
    defeated: Optional[bool] = None
    in_progress: Optional[bool] = None
    tier_id: Optional[int] = None
    position: Optional[int] = None
    boss_id: Optional[str] = None
    encounter_id: Optional[int] = None
    warcraft_logs_id: Optional[str] = None
    dps_ranking: Optional[int] = None
    healing_ranking: Optional[int] = None
    tank_ranking: Optional[int] = None
    last_kill_date: Optional[datetime] = None
    kill_count: Optional[int] = None
    fastest_kill: Optional[str] = None
    report_url: Optional[str] = None
    raider_io_data: Optional[Any] = None
    warcraft_logs_data: Optional[Any] = None


class RaidBoss(RowSchema):
    """Raid boss row with kill metadata."""

    name: str
    raid_name: str
    icon_url: Optional[str] = None
    best_time: Optional[str] = None
    best_parse: Optional[str] = None
    pull_count: Optional[int] = 0
    defeated: Optional[bool] = False
    in_progress: Optional[bool] = False
    difficulty: Optional[str] = "mythic"
    guild_id: int
    tier_id: Optional[int] = None
    position: Optional[int] = None
    last_updated: Optional[datetime] = None
    boss_id: Optional[str] = None
    encounter_id: Optional[int] = None
    warcraft_logs_id: Optional[str] = None
    dps_ranking: Optional[int] = None
    healing_ranking: Optional[int] = None
    tank_ranking: Optional[int] = None
    last_kill_date: Optional[datetime] = None
    kill_count: Optional[int] = None
    fastest_kill: Optional[str] = None
    report_url: Optional[str] = None
    raider_io_data: Optional[Any] = None
    warcraft_logs_data: Optional[Any] = None


# ═══════════════════════════════════════════════════════════════════════════════
# EXPANSIONS & RAID TIERS
# ═══════════════════════════════════════════════════════════════════════════════


class ExpansionCreate(BaseSchema):
    name: str
    short_name: str
    order: int = 0
    is_active: Optional[bool] = None
    release_date: Optional[datetime] = None


class Expansion(RowSchema):
    name: str
    short_name: str
    order: int = 0
    is_active: Optional[bool] = False
    release_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class RaidTierCreate(BaseSchema):
    name: str
    short_name: str
    expansion_id: int
    order: int = 0
    is_current: Optional[bool] = None
    release_date: Optional[datetime] = None


class RaidTier(RowSchema):
    name: str
    short_name: str
    expansion_id: int
    order: int = 0
    is_current: Optional[bool] = False
    release_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None
