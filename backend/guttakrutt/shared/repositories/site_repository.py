"""
Site Content Repositories

Admin-curated data rendered by the public pages: text blocks, settings,
translations and uploaded media metadata. Content, settings and
translations are addressed by a unique key.
"""

from typing import Optional

from sqlalchemy import select

from guttakrutt.shared.repositories.base import BaseRepository, read_operation
from guttakrutt.shared.schemas.site import (
    MediaFile,
    Translation,
    WebsiteContent,
    WebsiteSetting,
)


class KeyedRepository(BaseRepository):
    """Base for tables with a unique "key" column."""

    @read_operation()
    async def get_by_key(self, key: str):
        return await self.select_one(select(self.table).where(self.col("key") == key).limit(1))


class WebsiteContentRepository(KeyedRepository):
    table_name = "website_content"
    schema = WebsiteContent
    entity = "website content"

    @read_operation(list)
    async def get_all(self) -> list[WebsiteContent]:
        return await self.select_many(select(self.table).order_by(self.col("key")))


class WebsiteSettingRepository(KeyedRepository):
    """Repository for the website_settings table."""

    table_name = "website_settings"
    schema = WebsiteSetting
    entity = "website setting"

    @read_operation(list)
    async def get_all(self) -> list[WebsiteSetting]:
        """Settings grouped for the admin page: category, then key."""
        return await self.select_many(
            select(self.table).order_by(self.col("category"), self.col("key"))
        )

    async def upsert(self, key: str, value: str) -> WebsiteSetting:
        """
        Set a setting's value, creating the setting when it is missing.

        New settings are typed "string" in the "general" category.
        """
        existing = await self.get_by_key(key)
        if existing is not None:
            updated = await self.update(existing.id, {"value": value})
            if updated is not None:
                return updated
        return await self.create(
            {
                "key": key,
                "value": value,
                "type": "string",
                "category": "general",
                "description": "Auto-created setting",
            }
        )


class TranslationRepository(KeyedRepository):
    table_name = "translations"
    schema = Translation
    entity = "translation"

    @read_operation(list)
    async def get_all(self) -> list[Translation]:
        return await self.select_many(select(self.table).order_by(self.col("key")))


class MediaFileRepository(BaseRepository[MediaFile]):
    table_name = "media_files"
    schema = MediaFile
    entity = "media file"
    touch_field = None

    @read_operation(list)
    async def get_all(self) -> list[MediaFile]:
        """Uploads, newest first."""
        return await self.select_many(
            select(self.table).order_by(self.col("uploadedAt").desc(), self.table.c.id.desc())
        )

    @read_operation()
    async def get_by_filename(self, filename: str) -> Optional[MediaFile]:
        return await self.select_one(
            select(self.table).where(self.col("filename") == filename).order_by(self.table.c.id).limit(1)
        )
