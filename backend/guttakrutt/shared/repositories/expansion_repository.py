"""
Expansion & Raid Tier Repositories

Reference data for game content versions. Exactly one expansion is
active and exactly one raid tier is current; both flags are moved with a
single UPDATE (see BaseRepository.set_exclusive_flag).
"""

from typing import Optional

from sqlalchemy import select

from guttakrutt.shared.repositories.base import (
    BaseRepository,
    read_operation,
    write_operation,
)
from guttakrutt.shared.schemas.raid import Expansion, RaidTier


class ExpansionRepository(BaseRepository[Expansion]):
    """Repository for the expansions table."""

    table_name = "expansions"
    schema = Expansion
    entity = "expansion"

    @read_operation(list)
    async def get_all(self) -> list[Expansion]:
        """Expansions, newest (highest order) first."""
        return await self.select_many(
            select(self.table).order_by(self.col("order").desc(), self.table.c.id.desc())
        )

    @read_operation()
    async def get_active(self) -> Optional[Expansion]:
        return await self.select_one(
            select(self.table)
            .where(self.col("isActive").is_(True))
            .order_by(self.table.c.id)
            .limit(1)
        )

    @write_operation("activate")
    async def set_active(self, expansion_id: int) -> bool:
        """
        Make one expansion the active one.

        SQL Generated:
            UPDATE expansions SET is_active = (id = 3)

        Returns:
            False when no expansion has that id (nothing changes)
        """
        return await self.set_exclusive_flag("isActive", expansion_id)


class RaidTierRepository(BaseRepository[RaidTier]):
    """Repository for the raid_tiers table."""

    table_name = "raid_tiers"
    schema = RaidTier
    entity = "raid tier"

    @read_operation(list)
    async def get_by_expansion_id(self, expansion_id: int) -> list[RaidTier]:
        return await self.select_many(
            select(self.table)
            .where(self.col("expansionId") == expansion_id)
            .order_by(self.col("order").desc(), self.table.c.id.desc())
        )

    @read_operation()
    async def get_current(self) -> Optional[RaidTier]:
        return await self.select_one(
            select(self.table)
            .where(self.col("isCurrent").is_(True))
            .order_by(self.table.c.id)
            .limit(1)
        )

    @write_operation("mark current")
    async def set_current(self, tier_id: int) -> bool:
        """Make one raid tier the current one; False if the id is unknown."""
        return await self.set_exclusive_flag("isCurrent", tier_id)
