"""Tests for the expansion / raid tier singleton flags, run under both dialects."""

import pytest

from guttakrutt.shared.schemas import ExpansionCreate


@pytest.fixture
def expansion_data():
    def _create(name: str, short_name: str, order: int, **fields):
        data = {"name": name, "shortName": short_name, "order": order}
        data.update(fields)
        return data

    return _create


class TestExpansions:
    """Tests for the active-expansion flag."""

    @pytest.mark.asyncio
    async def test_set_active_moves_the_flag(self, storage, expansion_data):
        dragonflight = await storage.create_expansion(expansion_data("Dragonflight", "DF", 10, isActive=True))
        war_within = await storage.create_expansion(expansion_data("The War Within", "TWW", 11))

        assert await storage.set_active_expansion(war_within.id) is True

        assert (await storage.get_active_expansion()).id == war_within.id
        assert (await storage.get_expansion(dragonflight.id)).is_active is False
        assert (await storage.get_expansion(war_within.id)).is_active is True

    @pytest.mark.asyncio
    async def test_exactly_one_active_after_each_flip(self, storage, expansion_data):
        expansions = [
            await storage.create_expansion(expansion_data(f"Expansion {n}", f"E{n}", n))
            for n in range(4)
        ]

        for expansion in reversed(expansions):
            await storage.set_active_expansion(expansion.id)
            active = [e for e in await storage.get_expansions() if e.is_active]
            assert [e.id for e in active] == [expansion.id]

    @pytest.mark.asyncio
    async def test_missing_target_changes_nothing(self, storage, expansion_data):
        active = await storage.create_expansion(expansion_data("Dragonflight", "DF", 10, isActive=True))

        assert await storage.set_active_expansion(999) is False

        assert (await storage.get_active_expansion()).id == active.id

    @pytest.mark.asyncio
    async def test_listed_newest_first(self, storage, expansion_data):
        await storage.create_expansion(ExpansionCreate(name="Shadowlands", short_name="SL", order=9))
        await storage.create_expansion(ExpansionCreate(name="The War Within", short_name="TWW", order=11))
        await storage.create_expansion(ExpansionCreate(name="Dragonflight", short_name="DF", order=10))

        assert [e.short_name for e in await storage.get_expansions()] == ["TWW", "DF", "SL"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, storage, expansion_data):
        expansion = await storage.create_expansion(expansion_data("Dragonflight", "DF", 10))

        updated = await storage.update_expansion(expansion.id, {"shortName": "DRF"})

        assert updated.short_name == "DRF"
        assert await storage.delete_expansion(expansion.id) is True
        assert await storage.get_expansion(expansion.id) is None


class TestRaidTiers:
    """Tests for the current-tier flag."""

    @pytest.mark.asyncio
    async def test_set_current_tier(self, storage, expansion_data):
        expansion = await storage.create_expansion(expansion_data("The War Within", "TWW", 11))
        season_one = await storage.create_raid_tier(
            {"name": "Nerub-ar Palace", "shortName": "NP", "expansionId": expansion.id, "order": 1, "isCurrent": True}
        )
        season_two = await storage.create_raid_tier(
            {"name": "Liberation of Undermine", "shortName": "LoU", "expansionId": expansion.id, "order": 2}
        )

        assert await storage.set_current_raid_tier(season_two.id) is True

        assert (await storage.get_current_raid_tier()).id == season_two.id
        assert (await storage.get_raid_tier(season_one.id)).is_current is False
        assert [t.id for t in await storage.get_raid_tiers_by_expansion_id(expansion.id)] == [
            season_two.id,
            season_one.id,
        ]

    @pytest.mark.asyncio
    async def test_set_current_missing_tier(self, storage):
        assert await storage.set_current_raid_tier(12345) is False
        assert await storage.get_current_raid_tier() is None

    @pytest.mark.asyncio
    async def test_update_and_delete_tier(self, storage, expansion_data):
        expansion = await storage.create_expansion(expansion_data("The War Within", "TWW", 11))
        tier = await storage.create_raid_tier(
            {"name": "Manaforge Omega", "shortName": "MO", "expansionId": expansion.id, "order": 3}
        )

        assert (await storage.update_raid_tier(tier.id, {"order": 4})).order == 4
        assert await storage.delete_raid_tier(tier.id) is True
        assert await storage.update_raid_tier(tier.id, {"order": 5}) is None
