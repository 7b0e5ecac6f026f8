"""
Recruitment Schemas

Applications submitted through the public form, plus the admin-side
comments and notifications attached to them.
"""

from datetime import datetime
from typing import Optional

from guttakrutt.shared.schemas.common import BaseSchema, RowSchema
from guttakrutt.shared.schemas.enums import ApplicationStatus, NotificationType


class ApplicationCreate(BaseSchema):
    """Fields accepted from the public application form."""

    character_name: str
    class_name: str
    spec_name: str
    realm: str
    experience: str
    availability: str
    contact_info: str
    why_join: str
    item_level: Optional[int] = None
    raiders: Optional[str] = None
    referred_by: Optional[str] = None
    additional_info: Optional[str] = None
    logs: Optional[str] = None


class Application(RowSchema):
    """Recruitment application row."""

    character_name: str
    class_name: str
    spec_name: str
    realm: str
    item_level: Optional[int] = None
    experience: str
    availability: str
    contact_info: str
    why_join: str
    raiders: Optional[str] = None
    referred_by: Optional[str] = None
    additional_info: Optional[str] = None
    logs: Optional[str] = None
    status: str = ApplicationStatus.PENDING.value
    reviewed_by: Optional[int] = None
    review_notes: Optional[str] = None
    review_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationStatusChange(BaseSchema):
    """Admin decision on an application."""

    status: ApplicationStatus
    reviewed_by: int
    review_notes: Optional[str] = None


class ApplicationCommentCreate(BaseSchema):
    application_id: int
    admin_id: int
    comment: str


class ApplicationComment(RowSchema):
    """Admin note on an application; admin_username comes from a join."""

    application_id: int
    admin_id: int
    comment: str
    created_at: Optional[datetime] = None
    admin_username: Optional[str] = None


class ApplicationNotificationCreate(BaseSchema):
    application_id: int
    notification_type: NotificationType
    admin_id: Optional[int] = None


class ApplicationNotification(RowSchema):
    application_id: int
    admin_id: Optional[int] = None
    read: bool = False
    notification_type: str
    created_at: Optional[datetime] = None
