"""
Guild Handler

Public read endpoints for the guild, its roster and raid progress.

Every endpoint works on the site's default guild (the first guild row).
Repository reads degrade to empty results, so a failing query renders an
empty roster rather than an error page.
"""

from typing import Optional

from fastapi import APIRouter, Query

from guttakrutt.api.dependencies import StorageDep
from guttakrutt.shared.core.exceptions import NotFoundError
from guttakrutt.shared.schemas import Character, ErrorResponse, Guild, RaidBoss, RaidProgress
from guttakrutt.shared.schemas.enums import Difficulty


router = APIRouter()


@router.get(
    "/guild",
    response_model=Guild,
    responses={404: {"model": ErrorResponse, "description": "No guild stored yet"}},
)
async def get_guild(storage: StorageDep):
    """Get the site's guild."""
    guild = await storage.get_default_guild()
    if guild is None:
        raise NotFoundError("Guild")
    return guild


@router.get("/roster", response_model=list[Character])
async def get_roster(storage: StorageDep):
    """Roster of the site's guild, rank then name; empty without a guild."""
    guild = await storage.get_default_guild()
    if guild is None:
        return []
    return await storage.get_characters_by_guild_id(guild.id)


@router.get("/raid-progress", response_model=list[RaidProgress])
async def get_raid_progress(storage: StorageDep):
    """Raid progress rows, current tier first."""
    guild = await storage.get_default_guild()
    if guild is None:
        return []
    return await storage.get_raid_progresses_by_guild_id(guild.id)


@router.get("/raid-bosses", response_model=list[RaidBoss])
async def get_raid_bosses(
    storage: StorageDep,
    raid_name: Optional[str] = Query(None, alias="raidName", description="Only this raid"),
    difficulty: Difficulty = Query(Difficulty.MYTHIC, description="Raid difficulty"),
):
    """Boss progress for one difficulty, in encounter order."""
    guild = await storage.get_default_guild()
    if guild is None:
        return []
    return await storage.get_raid_bosses_by_guild_id(guild.id, raid_name, difficulty.value)
