"""Tests for web logs and admin-curated site data, run under both dialects."""

from datetime import timedelta

import pytest

from guttakrutt.shared.core.exceptions import ValidationError
from guttakrutt.shared.schemas import (
    MediaFileCreate,
    TranslationCreate,
    WebLogCreate,
    WebsiteContentCreate,
    WebsiteSettingCreate,
)
from guttakrutt.shared.utils import utcnow


class TestWebLogs:
    """Tests for web log listing, counting and cleanup."""

    @pytest.fixture
    def log_data(self):
        def _create(operation: str = "raid_sync", status: str = "success", age_days: int = 0, **fields):
            data = {
                "operation": operation,
                "status": status,
                "timestamp": utcnow() - timedelta(days=age_days),
            }
            data.update(fields)
            return data

        return _create

    @pytest.mark.asyncio
    async def test_create_from_schema(self, storage):
        log = await storage.create_web_log(
            WebLogCreate(operation="roster_sync", status="success", duration=812, metadata='{"count": 27}')
        )

        assert log.timestamp is not None
        assert log.metadata == '{"count": 27}'

    @pytest.mark.asyncio
    async def test_newest_first_with_paging(self, storage, log_data):
        oldest = await storage.create_web_log(log_data(age_days=3))
        middle = await storage.create_web_log(log_data(age_days=2))
        newest = await storage.create_web_log(log_data(age_days=1))

        assert [l.id for l in await storage.get_web_logs()] == [newest.id, middle.id, oldest.id]
        assert [l.id for l in await storage.get_web_logs(limit=1, offset=1)] == [middle.id]

    @pytest.mark.asyncio
    async def test_date_window(self, storage, log_data):
        await storage.create_web_log(log_data(age_days=10))
        recent = await storage.create_web_log(log_data(age_days=1))

        logs = await storage.get_web_logs(date_start=utcnow() - timedelta(days=5), date_end=utcnow())

        assert [l.id for l in logs] == [recent.id]
        assert await storage.count_web_logs(date_start=utcnow() - timedelta(days=5)) == 1
        assert await storage.count_web_logs() == 2

    @pytest.mark.asyncio
    async def test_filters_and_counts(self, storage, log_data):
        await storage.create_web_log(log_data("raid_sync", "success"))
        await storage.create_web_log(log_data("raid_sync", "error", userId=4))
        await storage.create_web_log(log_data("admin_login", "success", userId=4))

        assert len(await storage.get_web_logs_by_operation("raid_sync")) == 2
        assert len(await storage.get_web_logs_by_status("error")) == 1
        assert len(await storage.get_web_logs_by_user(4)) == 2
        assert await storage.count_web_logs_by_operation("admin_login") == 1
        assert await storage.count_web_logs_by_status("success") == 2
        assert await storage.count_web_logs_by_user(4) == 2

    @pytest.mark.asyncio
    async def test_delete_older_than(self, storage, log_data):
        await storage.create_web_log(log_data(age_days=40))
        await storage.create_web_log(log_data(age_days=31))
        kept = await storage.create_web_log(log_data(age_days=1))

        assert await storage.delete_web_logs(30) == 2
        assert [l.id for l in await storage.get_web_logs()] == [kept.id]

    @pytest.mark.asyncio
    async def test_negative_retention_is_rejected(self, storage, log_data):
        await storage.create_web_log(log_data(age_days=1))

        with pytest.raises(ValidationError):
            await storage.delete_web_logs(-1)
        assert await storage.count_web_logs() == 1


class TestWebsiteSettings:
    """Tests for settings and the upsert helper."""

    @pytest.mark.asyncio
    async def test_upsert_creates_missing_setting(self, storage):
        setting = await storage.upsert_website_setting("recruitment_open", "true")

        assert setting.value == "true"
        assert setting.type == "string"
        assert setting.category == "general"

    @pytest.mark.asyncio
    async def test_upsert_updates_existing_setting(self, storage):
        created = await storage.create_website_setting(
            WebsiteSettingCreate(key="raid_days", value="Wed", category="raids")
        )

        updated = await storage.upsert_website_setting("raid_days", "Wed/Thu")

        assert updated.id == created.id
        assert updated.value == "Wed/Thu"
        assert updated.category == "raids"

    @pytest.mark.asyncio
    async def test_ordered_by_category_then_key(self, storage):
        for key, category in [("b", "raids"), ("a", "raids"), ("z", "general")]:
            await storage.create_website_setting({"key": key, "value": "1", "type": "string", "category": category})

        assert [s.key for s in await storage.get_website_settings()] == ["z", "a", "b"]
        assert (await storage.get_website_setting_by_key("a")).category == "raids"


class TestSiteContent:
    """Tests for content blocks, translations and media."""

    @pytest.mark.asyncio
    async def test_content_by_key(self, storage):
        content = await storage.create_website_content(
            WebsiteContentCreate(key="about", title="About", content="Om oss", content_en="About us")
        )

        assert content.is_published is True
        assert (await storage.get_website_content_by_key("about")).id == content.id
        assert (await storage.update_website_content(content.id, {"contentNo": "Om oss"})).content_no == "Om oss"
        assert await storage.delete_website_content(content.id) is True

    @pytest.mark.asyncio
    async def test_translations_ordered_by_key(self, storage):
        await storage.create_translation(TranslationCreate(key="nav.roster", en_text="Roster", no_text="Medlemmer"))
        await storage.create_translation({"key": "nav.about", "enText": "About"})

        translations = await storage.get_translations()

        assert [t.key for t in translations] == ["nav.about", "nav.roster"]
        assert (await storage.get_translation_by_key("nav.roster")).no_text == "Medlemmer"

    @pytest.mark.asyncio
    async def test_media_newest_first(self, storage):
        older = await storage.create_media_file(
            MediaFileCreate(filename="old.png", path="/uploads/old.png", file_type="image", mime_type="image/png", size=10)
        )
        await storage.update_media_file(older.id, {"uploadedAt": utcnow() - timedelta(days=1)})
        newer = await storage.create_media_file(
            {"filename": "new.png", "path": "/uploads/new.png", "fileType": "image", "mimeType": "image/png", "size": 20}
        )

        assert [m.id for m in await storage.get_media_files()] == [newer.id, older.id]
        assert await storage.delete_media_file(older.id) is True
        assert await storage.get_media_file(older.id) is None

    @pytest.mark.asyncio
    async def test_media_by_filename(self, storage):
        banner = await storage.create_media_file(
            MediaFileCreate(filename="banner.webp", path="/uploads/banner.webp", file_type="image", mime_type="image/webp", size=512)
        )

        assert (await storage.get_media_file_by_filename("banner.webp")).id == banner.id
        assert await storage.get_media_file_by_filename("missing.webp") is None
