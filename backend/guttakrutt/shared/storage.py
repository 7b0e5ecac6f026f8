"""
Storage Facade

The single object the rest of the application talks to for persistence.
It composes the per-entity repositories around one engine and one write
strategy, and exposes flat, entity-named operations.

Wiring:
=======
┌─────────────────────────────────────────────────────────────────────────────┐
│                                                                             │
│   get_connection() ──▶ DatabaseConnection(dialect, engine, adapter)         │
│                                   │                                         │
│                                   ▼                                         │
│   create_storage(connection)                                                │
│        writer = make_writer(dialect)        ← picked once, never re-checked │
│        Storage(connection, writer)                                          │
│            ├── guilds        GuildRepository(engine, writer)                │
│            ├── characters    CharacterRepository(engine, writer)            │
│            ├── ...                                                          │
│            └── web_logs      WebLogRepository(engine, writer)               │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Failure Semantics:
==================
Inherited from the repositories: reads degrade to None / [] / 0 / False
with a warning, writes raise StorageError. Composite operations here
(verify_guild_membership) follow the same split.

Usage:
======
    storage = create_storage(get_connection())
    guild = await storage.get_default_guild()
    roster = await storage.get_characters_by_guild_id(guild.id)
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from guttakrutt.shared.core.logging import get_logger
from guttakrutt.shared.db.connection import DatabaseConnection
from guttakrutt.shared.db.dialect import Dialect
from guttakrutt.shared.repositories import (
    AdminUserRepository,
    ApplicationRepository,
    CharacterRepository,
    CommentRepository,
    ExpansionRepository,
    GuildRepository,
    MediaFileRepository,
    NotificationRepository,
    RaidBossRepository,
    RaidProgressRepository,
    RaidTierRepository,
    RowWriter,
    TranslationRepository,
    UserCharacterRepository,
    UserRepository,
    WebLogRepository,
    WebsiteContentRepository,
    WebsiteSettingRepository,
    make_writer,
)
from guttakrutt.shared.repositories.base import FieldData
from guttakrutt.shared.schemas import (
    AdminUser,
    Application,
    ApplicationComment,
    ApplicationNotification,
    Character,
    Expansion,
    Guild,
    LinkedCharacter,
    MediaFile,
    RaidBoss,
    RaidProgress,
    RaidTier,
    Translation,
    User,
    UserCharacter,
    WebLog,
    WebsiteContent,
    WebsiteSetting,
)


logger = get_logger("guttakrutt.storage")


class Storage:
    """
    Persistence facade over the per-entity repositories.

    Attributes:
        connection: The process-wide DatabaseConnection
        writer: Write strategy shared by every repository
        dialect: Active dialect
    """

    def __init__(self, connection: DatabaseConnection, writer: RowWriter) -> None:
        self.connection = connection
        self.writer = writer
        self.dialect: Dialect = writer.dialect

        engine = connection.engine
        self.guilds = GuildRepository(engine, writer)
        self.characters = CharacterRepository(engine, writer)
        self.raid_progresses = RaidProgressRepository(engine, writer)
        self.raid_bosses = RaidBossRepository(engine, writer)
        self.expansions = ExpansionRepository(engine, writer)
        self.raid_tiers = RaidTierRepository(engine, writer)
        self.users = UserRepository(engine, writer)
        self.user_characters = UserCharacterRepository(engine, writer)
        self.admin_users = AdminUserRepository(engine, writer)
        self.applications = ApplicationRepository(engine, writer)
        self.comments = CommentRepository(engine, writer)
        self.notifications = NotificationRepository(engine, writer)
        self.web_logs = WebLogRepository(engine, writer)
        self.website_content = WebsiteContentRepository(engine, writer)
        self.website_settings = WebsiteSettingRepository(engine, writer)
        self.translations = TranslationRepository(engine, writer)
        self.media_files = MediaFileRepository(engine, writer)

    async def ping(self) -> bool:
        """True if a trivial query round-trips through the query adapter."""
        try:
            rows = await self.connection.adapter.query("SELECT 1 AS ok")
        except Exception as exc:
            logger.warning("Database ping failed", dialect=self.dialect.value, error=str(exc))
            return False
        return bool(rows)

    # ═══════════════════════════════════════════════════════════════════════════
    # GUILD & ROSTER
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_guild(self, guild_id: int) -> Optional[Guild]:
        return await self.guilds.get(guild_id)

    async def get_default_guild(self) -> Optional[Guild]:
        return await self.guilds.get_default()

    async def get_guild_by_name(self, name: str, realm: str) -> Optional[Guild]:
        return await self.guilds.get_by_name(name, realm)

    async def create_guild(self, data: FieldData) -> Guild:
        return await self.guilds.create(data)

    async def update_guild(self, guild_id: int, data: FieldData) -> Optional[Guild]:
        return await self.guilds.update(guild_id, data)

    async def get_character(self, character_id: int) -> Optional[Character]:
        return await self.characters.get(character_id)

    async def get_characters_by_guild_id(self, guild_id: int) -> list[Character]:
        return await self.characters.get_by_guild_id(guild_id)

    async def count_characters_by_guild_id(self, guild_id: int) -> int:
        return await self.characters.count_by_guild_id(guild_id)

    async def get_character_by_name_and_guild(self, name: str, guild_id: int) -> Optional[Character]:
        return await self.characters.get_by_name_and_guild(name, guild_id)

    async def create_character(self, data: FieldData) -> Character:
        return await self.characters.create(data)

    async def update_character(self, character_id: int, data: FieldData) -> Optional[Character]:
        return await self.characters.update(character_id, data)

    async def delete_character(self, character_id: int) -> bool:
        return await self.characters.delete(character_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # EXPANSIONS & RAID TIERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_expansion(self, expansion_id: int) -> Optional[Expansion]:
        return await self.expansions.get(expansion_id)

    async def get_expansions(self) -> list[Expansion]:
        return await self.expansions.get_all()

    async def get_active_expansion(self) -> Optional[Expansion]:
        return await self.expansions.get_active()

    async def create_expansion(self, data: FieldData) -> Expansion:
        return await self.expansions.create(data)

    async def update_expansion(self, expansion_id: int, data: FieldData) -> Optional[Expansion]:
        return await self.expansions.update(expansion_id, data)

    async def delete_expansion(self, expansion_id: int) -> bool:
        return await self.expansions.delete(expansion_id)

    async def set_active_expansion(self, expansion_id: int) -> bool:
        return await self.expansions.set_active(expansion_id)

    async def get_raid_tier(self, tier_id: int) -> Optional[RaidTier]:
        return await self.raid_tiers.get(tier_id)

    async def get_raid_tiers_by_expansion_id(self, expansion_id: int) -> list[RaidTier]:
        return await self.raid_tiers.get_by_expansion_id(expansion_id)

    async def get_current_raid_tier(self) -> Optional[RaidTier]:
        return await self.raid_tiers.get_current()

    async def create_raid_tier(self, data: FieldData) -> RaidTier:
        return await self.raid_tiers.create(data)

    async def update_raid_tier(self, tier_id: int, data: FieldData) -> Optional[RaidTier]:
        return await self.raid_tiers.update(tier_id, data)

    async def delete_raid_tier(self, tier_id: int) -> bool:
        return await self.raid_tiers.delete(tier_id)

    async def set_current_raid_tier(self, tier_id: int) -> bool:
        return await self.raid_tiers.set_current(tier_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # RAID PROGRESS & BOSSES
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_raid_progress(self, progress_id: int) -> Optional[RaidProgress]:
        return await self.raid_progresses.get(progress_id)

    async def get_raid_progresses_by_guild_id(self, guild_id: int) -> list[RaidProgress]:
        return await self.raid_progresses.get_by_guild_id(guild_id)

    async def get_raid_progresses_by_tier_id(self, tier_id: int) -> list[RaidProgress]:
        return await self.raid_progresses.get_by_tier_id(tier_id)

    async def create_raid_progress(self, data: FieldData) -> RaidProgress:
        return await self.raid_progresses.create(data)

    async def update_raid_progress(self, progress_id: int, data: FieldData) -> Optional[RaidProgress]:
        return await self.raid_progresses.update(progress_id, data)

    async def get_raid_boss(self, boss_id: int) -> Optional[RaidBoss]:
        return await self.raid_bosses.get(boss_id)

    async def get_raid_bosses_by_guild_id(
        self,
        guild_id: int,
        raid_name: Optional[str] = None,
        difficulty: Optional[str] = "mythic",
    ) -> list[RaidBoss]:
        return await self.raid_bosses.get_by_guild_id(guild_id, raid_name, difficulty)

    async def get_raid_bosses_by_tier_id(self, tier_id: int) -> list[RaidBoss]:
        return await self.raid_bosses.get_by_tier_id(tier_id)

    async def find_raid_boss(
        self,
        name: str,
        raid_name: str,
        difficulty: str,
        guild_id: int,
    ) -> Optional[RaidBoss]:
        return await self.raid_bosses.get_by_identity(name, raid_name, difficulty, guild_id)

    async def create_raid_boss(self, data: FieldData) -> RaidBoss:
        return await self.raid_bosses.create(data)

    async def update_raid_boss(self, boss_id: int, data: FieldData) -> Optional[RaidBoss]:
        return await self.raid_bosses.update(boss_id, data)

    async def delete_raid_boss(self, boss_id: int) -> bool:
        return await self.raid_bosses.delete(boss_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # ADMIN USERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_admin_user(self, admin_id: int) -> Optional[AdminUser]:
        return await self.admin_users.get(admin_id)

    async def get_admin_user_by_username(self, username: str) -> Optional[AdminUser]:
        return await self.admin_users.get_by_username(username)

    async def get_admin_users(self) -> list[AdminUser]:
        return await self.admin_users.get_all()

    async def count_admin_users(self) -> int:
        return await self.admin_users.count()

    async def create_admin_user(self, data: FieldData) -> AdminUser:
        return await self.admin_users.create(data)

    async def update_admin_user(self, admin_id: int, data: FieldData) -> Optional[AdminUser]:
        return await self.admin_users.update(admin_id, data)

    async def delete_admin_user(self, admin_id: int) -> bool:
        return await self.admin_users.delete(admin_id)

    async def verify_admin_credentials(self, username: str, password: str) -> Optional[AdminUser]:
        return await self.admin_users.verify_credentials(username, password)

    # ═══════════════════════════════════════════════════════════════════════════
    # RECRUITMENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_application(self, application_id: int) -> Optional[Application]:
        return await self.applications.get(application_id)

    async def get_applications(self, status: Optional[str] = None) -> list[Application]:
        return await self.applications.get_all(status)

    async def create_application(self, data: FieldData) -> Application:
        return await self.applications.create(data)

    async def update_application(self, application_id: int, data: FieldData) -> Optional[Application]:
        return await self.applications.update(application_id, data)

    async def change_application_status(
        self,
        application_id: int,
        status: str,
        reviewed_by: int,
        review_notes: Optional[str] = None,
    ) -> Optional[Application]:
        return await self.applications.change_status(application_id, status, reviewed_by, review_notes)

    async def get_application_comments(self, application_id: int) -> list[ApplicationComment]:
        return await self.comments.get_by_application_id(application_id)

    async def create_application_comment(self, data: FieldData) -> ApplicationComment:
        return await self.comments.create(data)

    async def get_admin_notifications(self, admin_id: int) -> list[ApplicationNotification]:
        return await self.notifications.get_for_admin(admin_id)

    async def create_application_notification(self, data: FieldData) -> ApplicationNotification:
        return await self.notifications.create(data)

    async def mark_notification_as_read(self, notification_id: int) -> Optional[ApplicationNotification]:
        return await self.notifications.mark_as_read(notification_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # USERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.users.get_by_username(username)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.users.get_by_email(email)

    async def get_user_by_battle_net_id(self, battle_net_id: str) -> Optional[User]:
        return await self.users.get_by_battle_net_id(battle_net_id)

    async def get_user_by_battle_tag(self, battle_tag: str) -> Optional[User]:
        return await self.users.get_by_battle_tag(battle_tag)

    async def create_user(self, data: FieldData) -> User:
        return await self.users.create(data)

    async def update_user(self, user_id: int, data: FieldData) -> Optional[User]:
        return await self.users.update(user_id, data)

    async def update_user_tokens(
        self,
        user_id: int,
        access_token: str,
        refresh_token: str,
        token_expiry: datetime,
    ) -> Optional[User]:
        return await self.users.update_tokens(user_id, access_token, refresh_token, token_expiry)

    async def update_user_last_login(self, user_id: int) -> Optional[User]:
        return await self.users.update_last_login(user_id)

    async def connect_battle_net_account(
        self,
        user_id: int,
        battle_net_id: str,
        battle_tag: str,
        access_token: str,
        refresh_token: str,
        token_expiry: datetime,
    ) -> Optional[User]:
        return await self.users.connect_battle_net(
            user_id, battle_net_id, battle_tag, access_token, refresh_token, token_expiry
        )

    async def update_user_battle_net_data(self, user_id: int, data: Mapping[str, Any]) -> Optional[User]:
        return await self.users.update_battle_net_data(user_id, data)

    async def verify_guild_membership(self, user_id: int) -> bool:
        """
        Decide whether a user belongs to the site's guild and persist it.

        A user is a member when any character they linked has the same
        name and realm as a character on the default guild's roster.

        Returns:
            The membership flag as stored on the user (False when there is
            no guild yet, in which case nothing is written)
        """
        guild = await self.guilds.get_default()
        if guild is None:
            logger.info("No guild to verify membership against", user_id=user_id)
            return False

        is_member = False
        for character in await self.user_characters.get_linked_characters(user_id):
            realm = character.realm or guild.realm
            if await self.characters.get_by_name_and_realm(character.name, realm, guild.id):
                is_member = True
                break

        await self.users.update(user_id, {"isGuildMember": is_member})
        logger.info("Guild membership verified", user_id=user_id, is_member=is_member)
        return is_member

    # ═══════════════════════════════════════════════════════════════════════════
    # USER ↔ CHARACTER LINKS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_user_characters(self, user_id: int) -> list[LinkedCharacter]:
        return await self.user_characters.get_linked_characters(user_id)

    async def link_character_to_user(
        self,
        user_id: int,
        character_id: int,
        is_main: bool = False,
        verified: bool = False,
    ) -> UserCharacter:
        return await self.user_characters.link(user_id, character_id, is_main, verified)

    async def verify_character_ownership(self, user_id: int, character_id: int) -> Optional[UserCharacter]:
        return await self.user_characters.verify_ownership(user_id, character_id)

    async def set_main_character(self, user_id: int, character_id: int) -> bool:
        return await self.user_characters.set_main(user_id, character_id)

    async def user_owns_character(self, user_id: int, character_id: int) -> bool:
        return await self.user_characters.user_owns(user_id, character_id)

    async def get_user_main_character(self, user_id: int) -> Optional[Character]:
        return await self.user_characters.get_main_character(user_id)

    # ═══════════════════════════════════════════════════════════════════════════
    # WEB LOGS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_web_logs(
        self,
        limit: int = 100,
        offset: int = 0,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> list[WebLog]:
        return await self.web_logs.get_logs(limit, offset, date_start, date_end)

    async def get_web_logs_by_operation(
        self,
        operation: str,
        limit: int = 100,
        offset: int = 0,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> list[WebLog]:
        return await self.web_logs.get_logs(limit, offset, date_start, date_end, {"operation": operation})

    async def get_web_logs_by_status(
        self,
        status: str,
        limit: int = 100,
        offset: int = 0,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> list[WebLog]:
        return await self.web_logs.get_logs(limit, offset, date_start, date_end, {"status": status})

    async def get_web_logs_by_user(
        self,
        user_id: int,
        limit: int = 100,
        offset: int = 0,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> list[WebLog]:
        return await self.web_logs.get_logs(limit, offset, date_start, date_end, {"userId": user_id})

    async def count_web_logs(
        self,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> int:
        return await self.web_logs.count_logs(date_start, date_end)

    async def count_web_logs_by_operation(
        self,
        operation: str,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> int:
        return await self.web_logs.count_logs(date_start, date_end, {"operation": operation})

    async def count_web_logs_by_status(
        self,
        status: str,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> int:
        return await self.web_logs.count_logs(date_start, date_end, {"status": status})

    async def count_web_logs_by_user(
        self,
        user_id: int,
        date_start: Optional[datetime] = None,
        date_end: Optional[datetime] = None,
    ) -> int:
        return await self.web_logs.count_logs(date_start, date_end, {"userId": user_id})

    async def create_web_log(self, data: FieldData) -> WebLog:
        return await self.web_logs.create(data)

    async def delete_web_logs(self, older_than_days: int) -> int:
        return await self.web_logs.delete_older_than(older_than_days)

    # ═══════════════════════════════════════════════════════════════════════════
    # SITE CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_website_content(self, content_id: int) -> Optional[WebsiteContent]:
        return await self.website_content.get(content_id)

    async def get_website_content_by_key(self, key: str) -> Optional[WebsiteContent]:
        return await self.website_content.get_by_key(key)

    async def get_all_website_content(self) -> list[WebsiteContent]:
        return await self.website_content.get_all()

    async def create_website_content(self, data: FieldData) -> WebsiteContent:
        return await self.website_content.create(data)

    async def update_website_content(self, content_id: int, data: FieldData) -> Optional[WebsiteContent]:
        return await self.website_content.update(content_id, data)

    async def delete_website_content(self, content_id: int) -> bool:
        return await self.website_content.delete(content_id)

    async def get_website_setting(self, setting_id: int) -> Optional[WebsiteSetting]:
        return await self.website_settings.get(setting_id)

    async def get_website_setting_by_key(self, key: str) -> Optional[WebsiteSetting]:
        return await self.website_settings.get_by_key(key)

    async def get_website_settings(self) -> list[WebsiteSetting]:
        return await self.website_settings.get_all()

    async def create_website_setting(self, data: FieldData) -> WebsiteSetting:
        return await self.website_settings.create(data)

    async def update_website_setting(self, setting_id: int, data: FieldData) -> Optional[WebsiteSetting]:
        return await self.website_settings.update(setting_id, data)

    async def delete_website_setting(self, setting_id: int) -> bool:
        return await self.website_settings.delete(setting_id)

    async def upsert_website_setting(self, key: str, value: str) -> WebsiteSetting:
        return await self.website_settings.upsert(key, value)

    async def get_translation(self, translation_id: int) -> Optional[Translation]:
        return await self.translations.get(translation_id)

    async def get_translation_by_key(self, key: str) -> Optional[Translation]:
        return await self.translations.get_by_key(key)

    async def get_translations(self) -> list[Translation]:
        return await self.translations.get_all()

    async def create_translation(self, data: FieldData) -> Translation:
        return await self.translations.create(data)

    async def update_translation(self, translation_id: int, data: FieldData) -> Optional[Translation]:
        return await self.translations.update(translation_id, data)

    async def delete_translation(self, translation_id: int) -> bool:
        return await self.translations.delete(translation_id)

    async def get_media_file(self, media_id: int) -> Optional[MediaFile]:
        return await self.media_files.get(media_id)

    async def get_media_files(self) -> list[MediaFile]:
        return await self.media_files.get_all()

    async def get_media_file_by_filename(self, filename: str) -> Optional[MediaFile]:
        return await self.media_files.get_by_filename(filename)

    async def create_media_file(self, data: FieldData) -> MediaFile:
        return await self.media_files.create(data)

    async def update_media_file(self, media_id: int, data: FieldData) -> Optional[MediaFile]:
        return await self.media_files.update(media_id, data)

    async def delete_media_file(self, media_id: int) -> bool:
        return await self.media_files.delete(media_id)


def create_storage(connection: DatabaseConnection) -> Storage:
    """
    Wire a Storage for a resolved connection.

    Args:
        connection: Result of get_connection()

    Returns:
        Storage whose repositories share the connection's engine and the
        write strategy for its dialect
    """
    writer = make_writer(connection.dialect)
    logger.info(
        "Storage wired",
        dialect=connection.dialect.value,
        writer=type(writer).__name__,
    )
    return Storage(connection, writer)
