"""Tests for applications, comments and notifications, run under both dialects."""

import pytest
import pytest_asyncio

from guttakrutt.shared.schemas import (
    ApplicationCommentCreate,
    ApplicationCreate,
    ApplicationNotificationCreate,
    NotificationType,
)
from guttakrutt.shared.utils import SecurityUtils


@pytest.fixture
def application_form():
    def _create(character_name: str = "Truedps", **fields) -> ApplicationCreate:
        data = {
            "character_name": character_name,
            "class_name": "Mage",
            "spec_name": "Frost",
            "realm": "Tarren Mill",
            "experience": "Mythic raiding since Legion",
            "availability": "Wed/Thu/Sun 20:00-23:00",
            "contact_info": "Truedps#2101",
            "why_join": "Progress with friends",
            "raiders": "Holypal, Shadowmonk",
        }
        data.update(fields)
        return ApplicationCreate(**data)

    return _create


@pytest_asyncio.fixture
async def admin(storage):
    return await storage.create_admin_user(
        {"username": "Officer", "password": SecurityUtils.hash_password("hunter2")}
    )


class TestApplications:
    """Tests for application submission and review."""

    @pytest.mark.asyncio
    async def test_new_application_is_pending(self, storage, application_form):
        application = await storage.create_application(application_form())

        assert application.status == "pending"
        assert application.raiders == "Holypal, Shadowmonk"
        assert application.created_at is not None

    @pytest.mark.asyncio
    async def test_change_status(self, storage, application_form, admin):
        application = await storage.create_application(application_form())

        reviewed = await storage.change_application_status(
            application.id, "approved", admin.id, "Welcome aboard"
        )

        assert reviewed.status == "approved"
        assert reviewed.reviewed_by == admin.id
        assert reviewed.review_notes == "Welcome aboard"
        assert reviewed.review_date is not None
        assert reviewed.updated_at >= application.updated_at

    @pytest.mark.asyncio
    async def test_change_status_of_missing_application(self, storage):
        assert await storage.change_application_status(404, "rejected", 1) is None

    @pytest.mark.asyncio
    async def test_list_newest_first_and_by_status(self, storage, application_form, admin):
        first = await storage.create_application(application_form("First"))
        second = await storage.create_application(application_form("Second"))
        await storage.change_application_status(first.id, "rejected", admin.id)

        assert [a.id for a in await storage.get_applications()] == [second.id, first.id]
        assert [a.id for a in await storage.get_applications("pending")] == [second.id]
        assert [a.id for a in await storage.get_applications("rejected")] == [first.id]

    @pytest.mark.asyncio
    async def test_update_application(self, storage, application_form):
        application = await storage.create_application(application_form())

        updated = await storage.update_application(application.id, {"logs": "https://logs.example/r/1"})

        assert updated.logs == "https://logs.example/r/1"
        assert (await storage.get_application(application.id)).logs == updated.logs


class TestComments:
    """Tests for application comments and the author join."""

    @pytest.mark.asyncio
    async def test_comments_carry_admin_username_in_order(self, storage, application_form, admin):
        application = await storage.create_application(application_form())
        await storage.create_application_comment(
            ApplicationCommentCreate(application_id=application.id, admin_id=admin.id, comment="Strong logs")
        )
        await storage.create_application_comment(
            {"applicationId": application.id, "adminId": admin.id, "comment": "Trial next week"}
        )

        comments = await storage.get_application_comments(application.id)

        assert [c.comment for c in comments] == ["Strong logs", "Trial next week"]
        assert {c.admin_username for c in comments} == {"Officer"}

    @pytest.mark.asyncio
    async def test_comment_survives_removed_admin(self, storage, application_form, admin):
        application = await storage.create_application(application_form())
        await storage.create_application_comment(
            {"applicationId": application.id, "adminId": admin.id, "comment": "Strong logs"}
        )
        await storage.delete_admin_user(admin.id)

        comments = await storage.get_application_comments(application.id)

        assert len(comments) == 1
        assert comments[0].admin_username is None

    @pytest.mark.asyncio
    async def test_no_comments(self, storage):
        assert await storage.get_application_comments(1) == []


class TestNotifications:
    """Tests for admin notifications."""

    @pytest.mark.asyncio
    async def test_notifications_newest_first_and_mark_read(self, storage, application_form, admin):
        application = await storage.create_application(application_form())
        older = await storage.create_application_notification(
            ApplicationNotificationCreate(
                application_id=application.id,
                admin_id=admin.id,
                notification_type=NotificationType.NEW,
            )
        )
        newer = await storage.create_application_notification(
            {"applicationId": application.id, "adminId": admin.id, "notificationType": "comment"}
        )

        notifications = await storage.get_admin_notifications(admin.id)

        assert [n.id for n in notifications] == [newer.id, older.id]
        assert older.read is False
        assert older.notification_type == "new"

        marked = await storage.mark_notification_as_read(older.id)
        assert marked.read is True

    @pytest.mark.asyncio
    async def test_mark_missing_notification(self, storage):
        assert await storage.mark_notification_as_read(77) is None
