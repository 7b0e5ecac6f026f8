"""Tests for the two write strategies."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from guttakrutt.shared.core.exceptions import RecordVerificationError
from guttakrutt.shared.db import Dialect, build_tables
from guttakrutt.shared.repositories import ReselectWriter, ReturningWriter, make_writer


class TestMakeWriter:
    """Tests for make_writer()."""

    def test_postgres_uses_returning(self):
        writer = make_writer(Dialect.POSTGRES)

        assert isinstance(writer, ReturningWriter)
        assert writer.dialect is Dialect.POSTGRES

    def test_mysql_reselects(self):
        writer = make_writer(Dialect.MYSQL)

        assert isinstance(writer, ReselectWriter)
        assert writer.dialect is Dialect.MYSQL


class TestReselectWriter:
    """Tests for ReselectWriter's verification failures."""

    @pytest.fixture
    def table(self):
        return build_tables(Dialect.MYSQL).guilds

    @pytest.mark.asyncio
    async def test_insert_without_reported_id_fails_verification(self, table):
        insert_result = MagicMock()
        insert_result.inserted_primary_key = None
        conn = AsyncMock()
        conn.execute.return_value = insert_result

        with pytest.raises(RecordVerificationError) as exc_info:
            await ReselectWriter().insert(conn, table, {"name": "Guttakrutt"}, entity="guild")

        assert exc_info.value.message == "Failed to find guild after create"
        assert conn.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_insert_whose_row_vanished_fails_verification(self, table):
        insert_result = MagicMock()
        insert_result.inserted_primary_key = (7,)
        select_result = MagicMock()
        select_result.mappings.return_value.first.return_value = None
        conn = AsyncMock()
        conn.execute.side_effect = [insert_result, select_result]

        with pytest.raises(RecordVerificationError):
            await ReselectWriter().insert(conn, table, {"name": "Guttakrutt"}, entity="guild")

        assert conn.execute.await_count == 2


class TestWritersAgainstDatabase:
    """Both writers hand back the stored row."""

    @pytest.mark.asyncio
    async def test_insert_update_delete(self, engine, dialect):
        writer = make_writer(dialect)
        table = build_tables(dialect).guilds
        region = "serverRegion" if dialect is Dialect.POSTGRES else "server_region"

        async with engine.begin() as conn:
            row = await writer.insert(
                conn, table, {"name": "Guttakrutt", "realm": "Tarren Mill", "faction": "Horde"}, entity="guild"
            )
            assert row["id"] > 0
            assert row[region] == "eu"

            updated = await writer.update(conn, table, row["id"], {"faction": "Alliance"})
            assert updated["faction"] == "Alliance"
            assert await writer.update(conn, table, row["id"] + 100, {"faction": "Horde"}) is None

            assert await writer.delete(conn, table, row["id"]) is True
            assert await writer.delete(conn, table, row["id"]) is False
