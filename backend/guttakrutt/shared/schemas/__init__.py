"""
Pydantic Schemas

Row models returned by the repositories and the create models they accept.

Schema Categories:
==================
- common: BaseSchema (camelCase aliases), RowSchema, API envelopes
- enums: Difficulty, ApplicationStatus, NotificationType, LogStatus
- guild: Guild, Character, LinkedCharacter
- raid: RaidProgress, RaidBoss, Expansion, RaidTier
- recruitment: Application, ApplicationComment, ApplicationNotification
- account: User, UserCharacter, AdminUser
- site: WebLog, WebsiteContent, WebsiteSetting, Translation, MediaFile

Usage:
======
    from guttakrutt.shared.schemas import CharacterCreate, Character
"""

from guttakrutt.shared.schemas.common import (
    BaseSchema,
    RowSchema,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
)
from guttakrutt.shared.schemas.enums import (
    Difficulty,
    ApplicationStatus,
    NotificationType,
    LogStatus,
    DEPARTED_RANK,
)
from guttakrutt.shared.schemas.guild import (
    GuildCreate,
    Guild,
    CharacterCreate,
    Character,
    LinkedCharacter,
)
from guttakrutt.shared.schemas.raid import (
    RaidProgressCreate,
    RaidProgress,
    RaidBossCreate,
    RaidBoss,
    ExpansionCreate,
    Expansion,
    RaidTierCreate,
    RaidTier,
)
from guttakrutt.shared.schemas.recruitment import (
    ApplicationCreate,
    Application,
    ApplicationStatusChange,
    ApplicationCommentCreate,
    ApplicationComment,
    ApplicationNotificationCreate,
    ApplicationNotification,
)
from guttakrutt.shared.schemas.account import (
    UserCreate,
    User,
    UserCharacter,
    AdminUserCreate,
    AdminUser,
)
from guttakrutt.shared.schemas.site import (
    WebLogCreate,
    WebLog,
    WebsiteContentCreate,
    WebsiteContent,
    WebsiteSettingCreate,
    WebsiteSetting,
    TranslationCreate,
    Translation,
    MediaFileCreate,
    MediaFile,
)

__all__ = [
    # Common
    "BaseSchema",
    "RowSchema",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    # Enums
    "Difficulty",
    "ApplicationStatus",
    "NotificationType",
    "LogStatus",
    "DEPARTED_RANK",
    # Guild
    "GuildCreate",
    "Guild",
    "CharacterCreate",
    "Character",
    "LinkedCharacter",
    # Raid
    "RaidProgressCreate",
    "RaidProgress",
    "RaidBossCreate",
    "RaidBoss",
    "ExpansionCreate",
    "Expansion",
    "RaidTierCreate",
    "RaidTier",
    # Recruitment
    "ApplicationCreate",
    "Application",
    "ApplicationStatusChange",
    "ApplicationCommentCreate",
    "ApplicationComment",
    "ApplicationNotificationCreate",
    "ApplicationNotification",
    # Accounts
    "UserCreate",
    "User",
    "UserCharacter",
    "AdminUserCreate",
    "AdminUser",
    # Site
    "WebLogCreate",
    "WebLog",
    "WebsiteContentCreate",
    "WebsiteContent",
    "WebsiteSettingCreate",
    "WebsiteSetting",
    "TranslationCreate",
    "Translation",
    "MediaFileCreate",
    "MediaFile",
]
