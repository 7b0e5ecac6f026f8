"""Tests for the PostgreSQL → MySQL raw SQL rewrites."""

import pytest

from guttakrutt.shared.db import Dialect, DialectQueryAdapter, RawQuery, adapt_query


class TestAdaptQuery:
    """Tests for adapt_query()."""

    def test_postgres_query_is_untouched(self):
        sql = "SELECT name::text FROM characters WHERE created_at::date = NOW()::date"

        assert adapt_query(sql, Dialect.POSTGRES) == sql

    def test_mysql_cast_to_text_uses_char(self):
        assert (
            adapt_query("SELECT id::text FROM guilds", Dialect.MYSQL)
            == "SELECT CAST(id AS CHAR) FROM guilds"
        )

    def test_mysql_cast_of_aggregate_to_int(self):
        assert (
            adapt_query("SELECT COUNT(*)::int AS n FROM guilds", Dialect.MYSQL)
            == "SELECT CAST(COUNT(*) AS SIGNED) AS n FROM guilds"
        )

    def test_mysql_cast_keeps_bind_parameter(self):
        adapted = adapt_query("SELECT * FROM guilds WHERE id = :id::integer", Dialect.MYSQL)

        assert adapted == "SELECT * FROM guilds WHERE id = CAST(:id AS SIGNED)"

    @pytest.mark.parametrize(
        ("sql", "expected"),
        [
            ("SELECT c.is_main::boolean", "SELECT CAST(c.is_main AS UNSIGNED)"),
            ("SELECT raider_io_data::jsonb", "SELECT CAST(raider_io_data AS JSON)"),
            ("SELECT '2025-03-01'::timestamp", "SELECT CAST('2025-03-01' AS DATETIME)"),
            ("SELECT (rank + 1)::text", "SELECT CAST((rank + 1) AS CHAR)"),
        ],
    )
    def test_mysql_cast_targets(self, sql, expected):
        assert adapt_query(sql, Dialect.MYSQL) == expected

    def test_mysql_unmapped_cast_is_dropped(self):
        assert adapt_query("SELECT name::citext FROM characters", Dialect.MYSQL) == "SELECT name FROM characters"

    def test_mysql_now_date_is_rewritten_before_casts(self):
        adapted = adapt_query("SELECT * FROM web_logs WHERE timestamp::date = NOW()::date", Dialect.MYSQL)

        assert adapted == "SELECT * FROM web_logs WHERE CAST(timestamp AS DATE) = DATE(NOW())"
        assert "CAST(NOW()" not in adapted

    def test_mysql_now_date_is_case_insensitive(self):
        assert adapt_query("SELECT now()::DATE", Dialect.MYSQL) == "SELECT DATE(NOW())"

    def test_mysql_query_without_casts_is_unchanged(self):
        sql = "SELECT COUNT(*) FROM characters WHERE guild_id = :guild_id"

        assert adapt_query(sql, Dialect.MYSQL) == sql

    def test_raw_query_keeps_shape_and_params(self):
        query = RawQuery("SELECT id::text FROM guilds WHERE id = :id", {"id": 1})

        adapted = adapt_query(query, Dialect.MYSQL)

        assert isinstance(adapted, RawQuery)
        assert adapted.text == "SELECT CAST(id AS CHAR) FROM guilds WHERE id = :id"
        assert adapted.params == {"id": 1}

    def test_raw_query_on_postgres_is_same_object(self):
        query = RawQuery("SELECT id::text FROM guilds")

        assert adapt_query(query, Dialect.POSTGRES) is query


class TestDialectQueryAdapter:
    """Tests for DialectQueryAdapter against sqlite."""

    @pytest.mark.asyncio
    async def test_query_returns_row_dicts(self, connection):
        rows = await connection.adapter.query("SELECT 1 AS ok")

        assert rows == [{"ok": 1}]

    @pytest.mark.asyncio
    async def test_query_binds_params(self, connection, guild):
        rows = await connection.adapter.query(
            RawQuery("SELECT id FROM guilds WHERE id = :id", {"id": guild.id})
        )

        assert rows == [{"id": guild.id}]

    @pytest.mark.asyncio
    async def test_statement_without_rows_returns_empty_list(self, connection):
        assert await connection.adapter.query("DELETE FROM guilds WHERE id = :id", {"id": -1}) == []

    @pytest.mark.asyncio
    async def test_end_disposes_pool(self, tmp_path):
        from sqlalchemy.ext.asyncio import create_async_engine

        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'end.db'}")
        adapter = DialectQueryAdapter(engine, Dialect.MYSQL)
        await adapter.query("SELECT 1")

        await adapter.end()

        assert engine.pool.checkedout() == 0
