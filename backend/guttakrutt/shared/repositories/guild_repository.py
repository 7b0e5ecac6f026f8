"""
Guild & Character Repositories

The guild row is the implicit root of the site: most pages ask for "the"
guild, which is the first row by id. Characters are the roster.

Common Operations:
==================
- GuildRepository.get_default()               → first guild row
- GuildRepository.get_by_name(name, realm)    → lookup during API sync
- CharacterRepository.get_by_guild_id()       → roster, rank then name
- CharacterRepository.count_by_guild_id()     → roster size
- CharacterRepository.get_by_name_and_guild() → sync de-duplication

Every character write runs raiderIoScore through coerce_score().
"""

from typing import Any, Optional

from sqlalchemy import func, select

from guttakrutt.shared.repositories.base import BaseRepository, read_operation
from guttakrutt.shared.schemas.guild import Character, Guild
from guttakrutt.shared.utils.scores import coerce_score


class GuildRepository(BaseRepository[Guild]):
    """Repository for the guilds table."""

    table_name = "guilds"
    schema = Guild
    entity = "guild"

    @read_operation()
    async def get_default(self) -> Optional[Guild]:
        """
        Get the site's guild, the first row by id.

        SQL Generated:
            SELECT * FROM guilds ORDER BY id LIMIT 1
        """
        return await self.select_one(select(self.table).order_by(self.table.c.id).limit(1))

    @read_operation()
    async def get_by_name(self, name: str, realm: str) -> Optional[Guild]:
        """
        Get a guild by name and realm.

        Args:
            name: Guild name, e.g. "Guttakrutt"
            realm: Realm name, e.g. "Tarren Mill"
        """
        return await self.select_one(
            select(self.table)
            .where(self.col("name") == name, self.col("realm") == realm)
            .order_by(self.table.c.id)
            .limit(1)
        )


class CharacterRepository(BaseRepository[Character]):
    """
    Repository for the characters table.

    Rank 99 marks a character that has left the roster; such rows are kept
    and returned like any other.
    """

    table_name = "characters"
    schema = Character
    entity = "character"

    def prepare(self, fields: dict[str, Any]) -> dict[str, Any]:
        if "raiderIoScore" in fields:
            fields["raiderIoScore"] = coerce_score(fields["raiderIoScore"])
        return fields

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @read_operation(list)
    async def get_by_guild_id(self, guild_id: int) -> list[Character]:
        """
        Get a guild's roster ordered by rank, then name.

        SQL Generated:
            SELECT * FROM characters WHERE guild_id = 1 ORDER BY `rank`, name
        """
        return await self.select_many(
            select(self.table)
            .where(self.col("guildId") == guild_id)
            .order_by(self.col("rank"), self.col("name"))
        )

    @read_operation(int)
    async def count_by_guild_id(self, guild_id: int) -> int:
        statement = (
            select(func.count())
            .select_from(self.table)
            .where(self.col("guildId") == guild_id)
        )
        return int(await self.fetch_scalar(statement) or 0)

    @read_operation()
    async def get_by_name_and_guild(self, name: str, guild_id: int) -> Optional[Character]:
        return await self.select_one(
            select(self.table)
            .where(self.col("name") == name, self.col("guildId") == guild_id)
            .order_by(self.table.c.id)
            .limit(1)
        )

    @read_operation()
    async def get_by_name_and_realm(self, name: str, realm: str, guild_id: int) -> Optional[Character]:
        """Roster character matching a name and realm, used for membership checks."""
        return await self.select_one(
            select(self.table)
            .where(
                self.col("name") == name,
                self.col("realm") == realm,
                self.col("guildId") == guild_id,
            )
            .limit(1)
        )
