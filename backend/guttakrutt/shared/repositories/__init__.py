"""
Repository Pattern Implementations

Per-entity data access written once for both dialects. Repositories
speak camelCase fields and pydantic row models; the write strategy and
the field normalizer hide the dialect.

Repository Hierarchy:
=====================
    BaseRepository[SchemaType]          ← CRUD, failure policy, singleton flags
         │
         ├── GuildRepository / CharacterRepository
         ├── RaidProgressRepository / RaidBossRepository
         ├── ExpansionRepository / RaidTierRepository
         ├── UserRepository / UserCharacterRepository / AdminUserRepository
         ├── ApplicationRepository / CommentRepository / NotificationRepository
         ├── WebLogRepository
         └── WebsiteContent / WebsiteSetting / Translation / MediaFile repositories

    RowWriter                           ← write strategy, picked once
         ├── ReturningWriter            (PostgreSQL)
         └── ReselectWriter             (MySQL)

Usage Example:
==============
    from guttakrutt.shared.repositories import CharacterRepository, make_writer

    characters = CharacterRepository(engine, make_writer(dialect))
    roster = await characters.get_by_guild_id(guild.id)
"""

from guttakrutt.shared.repositories.base import (
    BaseRepository,
    read_operation,
    write_operation,
)
from guttakrutt.shared.repositories.writers import (
    ReselectWriter,
    ReturningWriter,
    RowWriter,
    make_writer,
)
from guttakrutt.shared.repositories.guild_repository import (
    CharacterRepository,
    GuildRepository,
)
from guttakrutt.shared.repositories.raid_repository import (
    RaidBossRepository,
    RaidProgressRepository,
)
from guttakrutt.shared.repositories.expansion_repository import (
    ExpansionRepository,
    RaidTierRepository,
)
from guttakrutt.shared.repositories.account_repository import (
    AdminUserRepository,
    UserCharacterRepository,
    UserRepository,
)
from guttakrutt.shared.repositories.recruitment_repository import (
    ApplicationRepository,
    CommentRepository,
    NotificationRepository,
)
from guttakrutt.shared.repositories.web_log_repository import WebLogRepository
from guttakrutt.shared.repositories.site_repository import (
    MediaFileRepository,
    TranslationRepository,
    WebsiteContentRepository,
    WebsiteSettingRepository,
)

__all__ = [
    # Base class and failure policy
    "BaseRepository",
    "read_operation",
    "write_operation",
    # Write strategies
    "RowWriter",
    "ReturningWriter",
    "ReselectWriter",
    "make_writer",
    # Entity-specific repositories
    "GuildRepository",
    "CharacterRepository",
    "RaidProgressRepository",
    "RaidBossRepository",
    "ExpansionRepository",
    "RaidTierRepository",
    "UserRepository",
    "UserCharacterRepository",
    "AdminUserRepository",
    "ApplicationRepository",
    "CommentRepository",
    "NotificationRepository",
    "WebLogRepository",
    "WebsiteContentRepository",
    "WebsiteSettingRepository",
    "TranslationRepository",
    "MediaFileRepository",
]
