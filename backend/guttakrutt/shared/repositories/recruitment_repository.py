"""
Recruitment Repositories

Applications from the public form and the admin-side records attached to
them.

    applications ──< application_comments >── admin_users
                 └─< application_notifications

Comments are listed together with the author's username, which comes
from a LEFT JOIN so a comment survives its admin being removed.
"""

from typing import Optional

from sqlalchemy import select

from guttakrutt.shared.repositories.base import BaseRepository, FieldData, read_operation
from guttakrutt.shared.schemas.enums import ApplicationStatus
from guttakrutt.shared.schemas.recruitment import (
    Application,
    ApplicationComment,
    ApplicationNotification,
)
from guttakrutt.shared.utils.clock import utcnow


class ApplicationRepository(BaseRepository[Application]):
    """Repository for the applications table."""

    table_name = "applications"
    schema = Application
    entity = "application"
    touch_field = "updatedAt"

    def prepare(self, fields: dict) -> dict:
        if "status" in fields and isinstance(fields["status"], ApplicationStatus):
            fields["status"] = fields["status"].value
        return fields

    @read_operation(list)
    async def get_all(self, status: Optional[str] = None) -> list[Application]:
        """
        Applications, newest first, optionally only one status.

        SQL Generated:
            SELECT * FROM applications WHERE status = 'pending'
            ORDER BY created_at DESC, id DESC
        """
        statement = select(self.table)
        if status is not None:
            statement = statement.where(self.col("status") == status)
        return await self.select_many(
            statement.order_by(self.col("createdAt").desc(), self.table.c.id.desc())
        )

    async def create(self, data: FieldData) -> Application:
        fields = self.to_fields(data)
        fields.setdefault("status", ApplicationStatus.PENDING.value)
        return await super().create(fields)

    async def change_status(
        self,
        application_id: int,
        status: str,
        reviewed_by: int,
        review_notes: Optional[str] = None,
    ) -> Optional[Application]:
        """
        Record an admin decision.

        Returns:
            The updated application, None if it does not exist
        """
        fields = {
            "status": status,
            "reviewedBy": reviewed_by,
            "reviewDate": utcnow(),
        }
        if review_notes is not None:
            fields["reviewNotes"] = review_notes
        return await self.update(application_id, fields)


class CommentRepository(BaseRepository[ApplicationComment]):
    """Repository for the application_comments table."""

    table_name = "application_comments"
    schema = ApplicationComment
    entity = "application comment"
    touch_field = None

    @read_operation(list)
    async def get_by_application_id(self, application_id: int) -> list[ApplicationComment]:
        """
        Comments on an application, oldest first, with the author's username.

        SQL Generated:
            SELECT application_comments.*, admin_users.username AS admin_username
            FROM application_comments
            LEFT OUTER JOIN admin_users ON admin_users.id = application_comments.admin_id
            WHERE application_comments.application_id = 7
            ORDER BY application_comments.created_at, application_comments.id
        """
        admins = self.tables.admin_users
        statement = (
            select(
                *self.table.c,
                self.col("username", admins).label(self.fields.column("adminUsername")),
            )
            .select_from(
                self.table.outerjoin(admins, admins.c.id == self.col("adminId"))
            )
            .where(self.col("applicationId") == application_id)
            .order_by(self.col("createdAt").asc(), self.table.c.id.asc())
        )
        return await self.select_many(statement)


class NotificationRepository(BaseRepository[ApplicationNotification]):
    """Repository for the application_notifications table."""

    table_name = "application_notifications"
    schema = ApplicationNotification
    entity = "application notification"
    touch_field = None

    def prepare(self, fields: dict) -> dict:
        notification_type = fields.get("notificationType")
        if notification_type is not None and hasattr(notification_type, "value"):
            fields["notificationType"] = notification_type.value
        return fields

    @read_operation(list)
    async def get_for_admin(self, admin_id: int) -> list[ApplicationNotification]:
        """Notifications addressed to an admin, newest first."""
        return await self.select_many(
            select(self.table)
            .where(self.col("adminId") == admin_id)
            .order_by(self.col("createdAt").desc(), self.table.c.id.desc())
        )

    async def mark_as_read(self, notification_id: int) -> Optional[ApplicationNotification]:
        return await self.update(notification_id, {"read": True})
