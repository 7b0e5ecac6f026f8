"""
Enums used across the application.
"""

from enum import Enum


class Difficulty(str, Enum):
    """Raid difficulty."""

    NORMAL = "normal"
    HEROIC = "heroic"
    MYTHIC = "mythic"


class ApplicationStatus(str, Enum):
    """Recruitment application lifecycle."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    """Why an admin notification was raised."""

    NEW = "new"
    STATUS_CHANGE = "status_change"
    COMMENT = "comment"


class LogStatus(str, Enum):
    """Outcome recorded on a web log row."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# Sentinel rank for characters that have left the roster
DEPARTED_RANK = 99
