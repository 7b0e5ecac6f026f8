"""
Field Normalizer

Translates between the application's camelCase field names and the column
names each dialect persists them under.

    PostgreSQL:  column name == field name       ("memberCount")
    MySQL:       explicit snake_case column      ("member_count")

Rows cross this boundary exactly once in each direction: repositories call
to_storage_row() before a write and from_storage_row() on every row read,
so nothing above the repositories ever sees a snake_case key.

Mapping Rules:
==============
- Every known field is listed in FIELD_COLUMNS, including the irregular
  ones (raiders → raiders_known, warcraftLogsId → warcraftlogs_id).
- Fields without a mapping (id, name, realm, ...) pass through unchanged.
- MySQL hands booleans back as TINYINT(1); from_storage_row() turns 0/1
  into False/True for the fields listed in BOOLEAN_FIELDS.

Example:
========
    >>> to_storage_row(Dialect.MYSQL, {"className": "Mage", "rank": 2})
    {'class_name': 'Mage', 'rank': 2}
    >>> from_storage_row(Dialect.MYSQL, {"class_name": "Mage", "is_main": 1})
    {'className': 'Mage', 'isMain': True}
"""

from typing import Any, Mapping

from guttakrutt.shared.db.dialect import Dialect


FIELD_COLUMNS: dict[str, str] = {
    # shared bookkeeping
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "lastUpdated": "last_updated",
    "updatedBy": "updated_by",
    "guildId": "guild_id",
    "tierId": "tier_id",
    "userId": "user_id",
    "adminId": "admin_id",
    "avatarUrl": "avatar_url",
    "className": "class_name",
    "specName": "spec_name",
    "itemLevel": "item_level",
    "lastLogin": "last_login",
    # guilds
    "memberCount": "member_count",
    "emblemUrl": "emblem_url",
    "serverRegion": "server_region",
    # characters
    "blizzardId": "blizzard_id",
    "raidParticipation": "raid_participation",
    "raiderIoScore": "raider_io_score",
    "lastActive": "last_active",
    "armoryLink": "armory_link",
    # raid progress
    "bossesDefeated": "bosses_defeated",
    "worldRank": "world_rank",
    "regionRank": "region_rank",
    "realmRank": "realm_rank",
    "isCurrentTier": "is_current_tier",
    # raid bosses
    "raidName": "raid_name",
    "iconUrl": "icon_url",
    "bestTime": "best_time",
    "bestParse": "best_parse",
    "pullCount": "pull_count",
    "inProgress": "in_progress",
    "bossId": "boss_id",
    "encounterId": "encounter_id",
    "warcraftLogsId": "warcraftlogs_id",
    "dpsRanking": "dps_ranking",
    "healingRanking": "healing_ranking",
    "tankRanking": "tank_ranking",
    "lastKillDate": "last_kill_date",
    "killCount": "kill_count",
    "fastestKill": "fastest_kill",
    "reportUrl": "report_url",
    "raiderIoData": "raider_io_data",
    "warcraftLogsData": "warcraft_logs_data",
    # expansions and raid tiers
    "shortName": "short_name",
    "isActive": "is_active",
    "releaseDate": "release_date",
    "expansionId": "expansion_id",
    "isCurrent": "is_current",
    # users and their characters
    "displayName": "display_name",
    "battleNetId": "battle_net_id",
    "battleTag": "battle_tag",
    "accessToken": "access_token",
    "refreshToken": "refresh_token",
    "tokenExpiry": "token_expiry",
    "isGuildMember": "is_guild_member",
    "isOfficer": "is_officer",
    "characterId": "character_id",
    "isMain": "is_main",
    "verifiedAt": "verified_at",
    # applications, comments, notifications
    "characterName": "character_name",
    "contactInfo": "contact_info",
    "whyJoin": "why_join",
    "raiders": "raiders_known",
    "referredBy": "referred_by",
    "additionalInfo": "additional_info",
    "reviewedBy": "reviewed_by",
    "reviewNotes": "review_notes",
    "reviewDate": "review_date",
    "applicationId": "application_id",
    "notificationType": "notification_type",
    "adminUsername": "admin_username",
    # site content
    "contentEn": "content_en",
    "contentNo": "content_no",
    "isPublished": "is_published",
    "fileType": "file_type",
    "mimeType": "mime_type",
    "uploadedAt": "uploaded_at",
    "uploadedBy": "uploaded_by",
    "enText": "en_text",
    "noText": "no_text",
    # web logs
    "ipAddress": "ip_address",
    "userAgent": "user_agent",
}

COLUMN_FIELDS: dict[str, str] = {column: field for field, column in FIELD_COLUMNS.items()}

BOOLEAN_FIELDS: frozenset[str] = frozenset(
    {
        "defeated",
        "inProgress",
        "isCurrentTier",
        "isActive",
        "isCurrent",
        "isGuildMember",
        "isOfficer",
        "isMain",
        "verified",
        "read",
        "isPublished",
    }
)


def column_name(dialect: Dialect, field: str) -> str:
    """Column a field is persisted under for the given dialect."""
    if dialect is Dialect.MYSQL:
        return FIELD_COLUMNS.get(field, field)
    return field


def field_name(dialect: Dialect, column: str) -> str:
    """Application field a column is read back as."""
    if dialect is Dialect.MYSQL:
        return COLUMN_FIELDS.get(column, column)
    return column


def to_storage_row(dialect: Dialect, obj: Mapping[str, Any]) -> dict[str, Any]:
    """
    Rename camelCase fields to the dialect's column names.

    Args:
        dialect: Active dialect
        obj: Field values keyed by camelCase field name

    Returns:
        New dict keyed by column name
    """
    return {column_name(dialect, key): value for key, value in obj.items()}


def from_storage_row(dialect: Dialect, row: Mapping[str, Any]) -> dict[str, Any]:
    """
    Rename a raw row's columns back to camelCase fields.

    Args:
        dialect: Active dialect
        row: Column values as returned by the driver

    Returns:
        New dict keyed by camelCase field name
    """
    fields = {field_name(dialect, key): value for key, value in row.items()}
    if dialect is Dialect.MYSQL:
        for key in BOOLEAN_FIELDS.intersection(fields):
            value = fields[key]
            if value is not None and not isinstance(value, bool):
                fields[key] = bool(value)
    return fields


class FieldNormalizer:
    """
    Dialect-bound view of the normalizer functions.

    Repositories hold one of these instead of passing the dialect around.
    """

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect

    def column(self, field: str) -> str:
        return column_name(self.dialect, field)

    def to_storage_row(self, obj: Mapping[str, Any]) -> dict[str, Any]:
        return to_storage_row(self.dialect, obj)

    def from_storage_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return from_storage_row(self.dialect, row)
