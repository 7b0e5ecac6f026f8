"""Tests for guild and roster persistence, run under both dialects."""

import pytest

from guttakrutt.shared.schemas import CharacterCreate, GuildCreate
from guttakrutt.shared.schemas.enums import DEPARTED_RANK


class TestGuilds:
    """Tests for guild reads and writes."""

    @pytest.mark.asyncio
    async def test_create_returns_stored_row(self, storage):
        guild = await storage.create_guild(
            GuildCreate(name="Guttakrutt", realm="Tarren Mill", faction="Horde", member_count=30)
        )

        assert guild.id > 0
        assert guild.name == "Guttakrutt"
        assert guild.member_count == 30
        assert guild.server_region == "eu"
        assert guild.last_updated is not None

    @pytest.mark.asyncio
    async def test_default_guild_is_first_by_id(self, storage, guild):
        await storage.create_guild({"name": "Other", "realm": "Draenor", "faction": "Alliance"})

        default = await storage.get_default_guild()

        assert default.id == guild.id

    @pytest.mark.asyncio
    async def test_get_by_name_and_realm(self, storage, guild):
        assert (await storage.get_guild_by_name("Guttakrutt", "Tarren Mill")).id == guild.id
        assert await storage.get_guild_by_name("Guttakrutt", "Draenor") is None

    @pytest.mark.asyncio
    async def test_no_guild_yet(self, storage):
        assert await storage.get_default_guild() is None

    @pytest.mark.asyncio
    async def test_update_is_partial(self, storage, guild):
        updated = await storage.update_guild(guild.id, {"memberCount": 42})

        assert updated.member_count == 42
        assert updated.faction == "Horde"
        assert updated.realm == "Tarren Mill"

    @pytest.mark.asyncio
    async def test_empty_update_returns_current_row(self, storage, guild):
        assert await storage.update_guild(guild.id, {}) == await storage.get_guild(guild.id)

    @pytest.mark.asyncio
    async def test_update_missing_guild_returns_none(self, storage):
        assert await storage.update_guild(404, {"memberCount": 1}) is None


class TestRoster:
    """Tests for character persistence."""

    @pytest.mark.asyncio
    async def test_roster_scenario(self, storage, guild, character_data):
        """Create three, count, delete one, count again."""
        created = [
            await storage.create_character(character_data(guild.id, name, rank=rank))
            for name, rank in [("Truedps", 0), ("Holypal", 2), ("Shadowmonk", 2)]
        ]

        assert await storage.count_characters_by_guild_id(guild.id) == 3
        assert await storage.delete_character(created[1].id) is True
        assert await storage.count_characters_by_guild_id(guild.id) == 2
        assert await storage.get_character(created[1].id) is None

    @pytest.mark.asyncio
    async def test_roster_ordered_by_rank_then_name(self, storage, guild, character_data):
        for name, rank in [("Zulu", 1), ("Bravo", 3), ("Alpha", 3), ("Leader", 0)]:
            await storage.create_character(character_data(guild.id, name, rank=rank))

        roster = await storage.get_characters_by_guild_id(guild.id)

        assert [c.name for c in roster] == ["Leader", "Zulu", "Alpha", "Bravo"]

    @pytest.mark.asyncio
    async def test_score_is_coerced_on_create_and_update(self, storage, guild, character_data):
        character = await storage.create_character(
            character_data(guild.id, "Truedps", raiderIoScore="2450.6")
        )
        assert character.raider_io_score == 2451

        updated = await storage.update_character(character.id, {"raiderIoScore": "n/a"})
        assert updated.raider_io_score == 0

    @pytest.mark.asyncio
    async def test_create_from_schema(self, storage, guild):
        character = await storage.create_character(
            CharacterCreate(
                name="Holypal",
                class_name="Paladin",
                rank=2,
                level=80,
                guild_id=guild.id,
                raider_io_score=673.312,
                raid_participation={"nerubar": 8},
            )
        )

        assert character.class_name == "Paladin"
        assert character.raider_io_score == 673
        assert character.raid_participation == {"nerubar": 8}

    @pytest.mark.asyncio
    async def test_departed_characters_are_kept(self, storage, guild, character_data):
        character = await storage.create_character(character_data(guild.id, "Oldtimer"))

        departed = await storage.update_character(character.id, {"rank": DEPARTED_RANK})

        assert departed.rank == DEPARTED_RANK
        assert await storage.count_characters_by_guild_id(guild.id) == 1

    @pytest.mark.asyncio
    async def test_lookup_by_name_and_guild(self, storage, guild, character_data):
        character = await storage.create_character(character_data(guild.id, "Truedps"))

        found = await storage.get_character_by_name_and_guild("Truedps", guild.id)

        assert found.id == character.id
        assert await storage.get_character_by_name_and_guild("Truedps", guild.id + 1) is None

    @pytest.mark.asyncio
    async def test_delete_missing_character_returns_false(self, storage):
        assert await storage.delete_character(9999) is False

    @pytest.mark.asyncio
    async def test_update_stamps_last_updated(self, storage, guild, character_data):
        character = await storage.create_character(character_data(guild.id, "Truedps"))

        updated = await storage.update_character(character.id, {"itemLevel": 639})

        assert updated.item_level == 639
        assert updated.last_updated >= character.last_updated
