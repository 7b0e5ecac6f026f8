"""
Table Definitions

SQLAlchemy Core tables for every persisted entity, built per dialect.

The logical schema is identical on both engines; only the column names
differ. Each column is declared by its camelCase field name and renamed
through the Field Normalizer, so:

    build_tables(Dialect.POSTGRES).characters.c["raiderIoScore"]
    build_tables(Dialect.MYSQL).characters.c["raider_io_score"]

describe the same column.

Schema Ownership:
=================
The production schema already exists on both engines; create_schema() is
only used by tests and fresh development databases.

Tables:
=======
    guilds, characters, raid_progresses, raid_bosses, expansions, raid_tiers,
    users, user_characters, admin_users, applications, application_comments,
    application_notifications, web_logs, website_content, website_settings,
    translations, media_files
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    false,
    text,
    true,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncConnection

from guttakrutt.shared.db.dialect import Dialect
from guttakrutt.shared.db.normalizer import column_name


# JSONB on PostgreSQL, plain JSON elsewhere
JsonData = JSON().with_variant(JSONB(), "postgresql")

NOW = text("CURRENT_TIMESTAMP")


@dataclass(frozen=True)
class GuildTables:
    """All tables of one dialect, sharing a MetaData."""

    metadata: MetaData
    guilds: Table
    characters: Table
    raid_progresses: Table
    raid_bosses: Table
    expansions: Table
    raid_tiers: Table
    users: Table
    user_characters: Table
    admin_users: Table
    applications: Table
    application_comments: Table
    application_notifications: Table
    web_logs: Table
    website_content: Table
    website_settings: Table
    translations: Table
    media_files: Table


@lru_cache
def build_tables(dialect: Dialect) -> GuildTables:
    """
    Build the table set for a dialect.

    Args:
        dialect: Dialect whose column naming to use

    Returns:
        GuildTables; cached, so repeated calls share one MetaData
    """
    metadata = MetaData()

    def col(field: str, type_: Any, *args: Any, **kwargs: Any) -> Column:
        return Column(column_name(dialect, field), type_, *args, **kwargs)

    def pk() -> Column:
        return Column("id", Integer, primary_key=True, autoincrement=True)

    def stamp(field: str, nullable: bool = True) -> Column:
        return col(field, DateTime, server_default=NOW, nullable=nullable)

    # ═══════════════════════════════════════════════════════════════════════════
    # GUILD & ROSTER
    # ═══════════════════════════════════════════════════════════════════════════

    guilds = Table(
        "guilds",
        metadata,
        pk(),
        col("name", String(255), nullable=False),
        col("realm", String(255), nullable=False),
        col("faction", String(50), nullable=False),
        col("description", Text),
        col("memberCount", Integer),
        stamp("lastUpdated"),
        col("emblemUrl", Text),
        col("serverRegion", String(10), server_default="eu"),
    )

    characters = Table(
        "characters",
        metadata,
        pk(),
        col("name", String(255), nullable=False),
        col("className", String(50), nullable=False),
        col("specName", String(50)),
        col("rank", Integer, nullable=False),
        col("level", Integer, nullable=False),
        col("avatarUrl", Text),
        col("itemLevel", Integer),
        col("guildId", Integer, nullable=False, index=True),
        col("blizzardId", String(64)),
        col("realm", String(255)),
        col("role", String(20)),
        col("raidParticipation", JsonData),
        col("raiderIoScore", Integer),
        col("lastActive", DateTime),
        col("armoryLink", Text),
        stamp("lastUpdated"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RAIDS
    # ═══════════════════════════════════════════════════════════════════════════

    raid_progresses = Table(
        "raid_progresses",
        metadata,
        pk(),
        col("name", String(255), nullable=False),
        col("bosses", Integer, nullable=False),
        col("bossesDefeated", Integer, nullable=False),
        col("difficulty", String(20), nullable=False),
        col("guildId", Integer, nullable=False, index=True),
        col("worldRank", Integer),
        col("regionRank", Integer),
        col("realmRank", Integer),
        col("tierId", Integer),
        col("isCurrentTier", Boolean, server_default=false()),
        stamp("lastUpdated"),
    )

    # No unique constraint on (name, raidName, difficulty, guildId): existing
    # deployments hold duplicates, find_raid_boss() is the lookup to use
    raid_bosses = Table(
        "raid_bosses",
        metadata,
        pk(),
        col("name", String(255), nullable=False),
        col("raidName", String(255), nullable=False),
        col("iconUrl", Text),
        col("bestTime", String(32)),
        col("bestParse", String(32)),
        col("pullCount", Integer, server_default=text("0")),
        col("defeated", Boolean, server_default=false()),
        col("inProgress", Boolean, server_default=false()),
        col("difficulty", String(20), server_default="mythic"),
        col("guildId", Integer, nullable=False, index=True),
        col("tierId", Integer),
        col("position", Integer),
        stamp("lastUpdated"),
        col("bossId", String(64)),
        col("encounterId", Integer),
        col("warcraftLogsId", String(64)),
        col("dpsRanking", Integer),
        col("healingRanking", Integer),
        col("tankRanking", Integer),
        col("lastKillDate", DateTime),
        col("killCount", Integer),
        col("fastestKill", String(16)),
        col("reportUrl", Text),
        col("raiderIoData", JsonData),
        col("warcraftLogsData", JsonData),
    )

    expansions = Table(
        "expansions",
        metadata,
        pk(),
        col("name", String(255), nullable=False),
        col("shortName", String(32), nullable=False),
        col("order", Integer, nullable=False, server_default=text("0")),
        col("isActive", Boolean, server_default=false()),
        col("releaseDate", DateTime),
        stamp("lastUpdated"),
    )

    raid_tiers = Table(
        "raid_tiers",
        metadata,
        pk(),
        col("name", String(255), nullable=False),
        col("shortName", String(32), nullable=False),
        col("expansionId", Integer, nullable=False, index=True),
        col("order", Integer, nullable=False, server_default=text("0")),
        col("isCurrent", Boolean, server_default=false()),
        col("releaseDate", DateTime),
        stamp("lastUpdated"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # ACCOUNTS
    # ═══════════════════════════════════════════════════════════════════════════

    users = Table(
        "users",
        metadata,
        pk(),
        col("username", String(255), nullable=False, unique=True),
        col("email", String(255)),
        col("password", Text),
        col("displayName", String(255)),
        col("battleNetId", String(64), unique=True),
        col("battleTag", String(64)),
        col("accessToken", Text),
        col("refreshToken", Text),
        col("tokenExpiry", DateTime),
        stamp("lastLogin"),
        stamp("createdAt", nullable=False),
        col("isGuildMember", Boolean, server_default=false()),
        col("isOfficer", Boolean, server_default=false()),
        col("region", String(10), server_default="eu"),
        col("locale", String(10), server_default="en_GB"),
        col("avatarUrl", Text),
    )

    user_characters = Table(
        "user_characters",
        metadata,
        pk(),
        col("userId", Integer, nullable=False, index=True),
        col("characterId", Integer, nullable=False),
        col("isMain", Boolean, server_default=false()),
        col("verified", Boolean, server_default=false()),
        col("verifiedAt", DateTime),
        stamp("createdAt", nullable=False),
    )

    admin_users = Table(
        "admin_users",
        metadata,
        pk(),
        col("username", String(255), nullable=False, unique=True),
        col("password", Text, nullable=False),
        col("lastLogin", DateTime),
        stamp("lastUpdated"),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RECRUITMENT
    # ═══════════════════════════════════════════════════════════════════════════

    applications = Table(
        "applications",
        metadata,
        pk(),
        col("characterName", String(255), nullable=False),
        col("className", String(50), nullable=False),
        col("specName", String(50), nullable=False),
        col("realm", String(255), nullable=False),
        col("itemLevel", Integer),
        col("experience", Text, nullable=False),
        col("availability", Text, nullable=False),
        col("contactInfo", Text, nullable=False),
        col("whyJoin", Text, nullable=False),
        col("raiders", Text),
        col("referredBy", Text),
        col("additionalInfo", Text),
        col("logs", Text),
        col("status", String(20), nullable=False, server_default="pending"),
        col("reviewedBy", Integer),
        col("reviewNotes", Text),
        col("reviewDate", DateTime),
        stamp("createdAt", nullable=False),
        stamp("updatedAt", nullable=False),
    )

    application_comments = Table(
        "application_comments",
        metadata,
        pk(),
        col("applicationId", Integer, nullable=False, index=True),
        col("adminId", Integer, nullable=False),
        col("comment", Text, nullable=False),
        stamp("createdAt", nullable=False),
    )

    application_notifications = Table(
        "application_notifications",
        metadata,
        pk(),
        col("applicationId", Integer, nullable=False),
        col("adminId", Integer),
        col("read", Boolean, nullable=False, server_default=false()),
        col("notificationType", String(32), nullable=False),
        stamp("createdAt", nullable=False),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # OPERATIONS & SITE CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    web_logs = Table(
        "web_logs",
        metadata,
        pk(),
        col("operation", String(64), nullable=False, index=True),
        col("status", String(16), nullable=False),
        col("details", Text),
        stamp("timestamp", nullable=False),
        col("userId", Integer),
        col("duration", Integer),
        col("ipAddress", String(64)),
        col("userAgent", Text),
        col("metadata", Text),
    )

    website_content = Table(
        "website_content",
        metadata,
        pk(),
        col("key", String(255), nullable=False, unique=True),
        col("title", String(255), nullable=False),
        col("content", Text, nullable=False),
        col("contentEn", Text, nullable=False),
        col("contentNo", Text),
        col("isPublished", Boolean, server_default=true()),
        stamp("lastUpdated"),
        col("updatedBy", Integer),
    )

    website_settings = Table(
        "website_settings",
        metadata,
        pk(),
        col("key", String(255), nullable=False, unique=True),
        col("value", Text, nullable=False),
        col("description", Text),
        col("type", String(16), nullable=False),
        col("category", String(64), nullable=False),
        stamp("lastUpdated"),
        col("updatedBy", Integer),
    )

    translations = Table(
        "translations",
        metadata,
        pk(),
        col("key", String(255), nullable=False, unique=True),
        col("enText", Text, nullable=False),
        col("noText", Text),
        col("context", Text),
        stamp("lastUpdated"),
    )

    media_files = Table(
        "media_files",
        metadata,
        pk(),
        col("filename", String(255), nullable=False),
        col("path", Text, nullable=False),
        col("fileType", String(32), nullable=False),
        col("mimeType", String(128), nullable=False),
        col("size", Integer, nullable=False),
        col("width", Integer),
        col("height", Integer),
        col("title", String(255)),
        col("description", Text),
        stamp("uploadedAt"),
        col("uploadedBy", Integer),
    )

    return GuildTables(
        metadata=metadata,
        guilds=guilds,
        characters=characters,
        raid_progresses=raid_progresses,
        raid_bosses=raid_bosses,
        expansions=expansions,
        raid_tiers=raid_tiers,
        users=users,
        user_characters=user_characters,
        admin_users=admin_users,
        applications=applications,
        application_comments=application_comments,
        application_notifications=application_notifications,
        web_logs=web_logs,
        website_content=website_content,
        website_settings=website_settings,
        translations=translations,
        media_files=media_files,
    )


async def create_schema(conn: AsyncConnection, dialect: Dialect) -> None:
    """
    Create every table that does not exist yet.

    Args:
        conn: Open async connection (inside engine.begin())
        dialect: Dialect whose column naming to use
    """
    await conn.run_sync(build_tables(dialect).metadata.create_all)
