"""
Raid Repositories

Raid progress summaries and individual raid bosses.

RaidBoss Identity:
==================
Bosses are identified informally by (name, raidName, difficulty, guildId).
No database constraint enforces it, so refresh jobs should look a boss up
with get_by_identity() before creating it. Creation always returns the row
re-read by its own id, never a same-named neighbour.
"""

from typing import Optional

from sqlalchemy import select

from guttakrutt.shared.repositories.base import BaseRepository, read_operation
from guttakrutt.shared.schemas.enums import Difficulty
from guttakrutt.shared.schemas.raid import RaidBoss, RaidProgress


class RaidProgressRepository(BaseRepository[RaidProgress]):
    """Repository for the raid_progresses table."""

    table_name = "raid_progresses"
    schema = RaidProgress
    entity = "raid progress"

    @read_operation(list)
    async def get_by_guild_id(self, guild_id: int) -> list[RaidProgress]:
        """Progress rows for a guild, current tier first, then newest."""
        return await self.select_many(
            select(self.table)
            .where(self.col("guildId") == guild_id)
            .order_by(self.col("isCurrentTier").desc(), self.table.c.id.desc())
        )

    @read_operation(list)
    async def get_by_tier_id(self, tier_id: int) -> list[RaidProgress]:
        return await self.select_many(
            select(self.table)
            .where(self.col("tierId") == tier_id)
            .order_by(self.table.c.id)
        )


class RaidBossRepository(BaseRepository[RaidBoss]):
    """Repository for the raid_bosses table."""

    table_name = "raid_bosses"
    schema = RaidBoss
    entity = "raid boss"

    def _ordered(self, statement):
        # Explicit NULL handling: MySQL sorts NULL first, PostgreSQL last
        position = self.col("position")
        return statement.order_by(position.is_(None), position, self.table.c.id)

    @read_operation(list)
    async def get_by_guild_id(
        self,
        guild_id: int,
        raid_name: Optional[str] = None,
        difficulty: Optional[str] = Difficulty.MYTHIC.value,
    ) -> list[RaidBoss]:
        """
        Get a guild's bosses, optionally narrowed to one raid.

        Args:
            guild_id: Owning guild
            raid_name: Only bosses of this raid when given
            difficulty: Difficulty to show; mythic unless told otherwise,
                None returns every difficulty

        Returns:
            Bosses ordered by position (unset positions last), then id

        SQL Generated:
            SELECT * FROM raid_bosses
            WHERE guild_id = 1 AND raid_name = 'Liberation of Undermine' AND difficulty = 'mythic'
            ORDER BY position IS NULL, position, id
        """
        statement = select(self.table).where(self.col("guildId") == guild_id)
        if raid_name:
            statement = statement.where(self.col("raidName") == raid_name)
        if difficulty:
            statement = statement.where(self.col("difficulty") == difficulty)
        return await self.select_many(self._ordered(statement))

    @read_operation(list)
    async def get_by_tier_id(self, tier_id: int) -> list[RaidBoss]:
        return await self.select_many(
            self._ordered(select(self.table).where(self.col("tierId") == tier_id))
        )

    @read_operation()
    async def get_by_identity(
        self,
        name: str,
        raid_name: str,
        difficulty: str,
        guild_id: int,
    ) -> Optional[RaidBoss]:
        """
        Oldest boss row matching the informal identity tuple.

        Returns:
            The lowest-id match, None when there is none
        """
        return await self.select_one(
            select(self.table)
            .where(
                self.col("name") == name,
                self.col("raidName") == raid_name,
                self.col("difficulty") == difficulty,
                self.col("guildId") == guild_id,
            )
            .order_by(self.table.c.id)
            .limit(1)
        )
