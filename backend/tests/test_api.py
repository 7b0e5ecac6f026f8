"""Tests for the FastAPI routes with the Storage dependency replaced."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from guttakrutt.api.dependencies import get_storage
from guttakrutt.api.middleware import REQUEST_ID_HEADER
from guttakrutt.api.main import create_application
from guttakrutt.shared.core.exceptions import StorageError
from guttakrutt.shared.db import Dialect
from guttakrutt.shared.schemas import Application, Character, Guild, RaidBoss


GUILD = Guild(id=1, name="Guttakrutt", realm="Tarren Mill", faction="Horde", member_count=30)

APPLICATION = Application(
    id=7,
    character_name="Truedps",
    class_name="Mage",
    spec_name="Frost",
    realm="Tarren Mill",
    experience="Mythic raiding since Legion",
    availability="Wed/Thu/Sun",
    contact_info="Truedps#2101",
    why_join="Progress",
    raiders="Holypal",
    status="pending",
    created_at=datetime(2025, 3, 1, 20, 0, 0),
)

FORM = {
    "characterName": "Truedps",
    "className": "Mage",
    "specName": "Frost",
    "realm": "Tarren Mill",
    "experience": "Mythic raiding since Legion",
    "availability": "Wed/Thu/Sun",
    "contactInfo": "Truedps#2101",
    "whyJoin": "Progress",
    "raiders": "Holypal",
}


@pytest.fixture
def mock_storage():
    storage = MagicMock()
    storage.dialect = Dialect.MYSQL
    storage.ping = AsyncMock(return_value=True)
    storage.get_default_guild = AsyncMock(return_value=GUILD)
    storage.get_characters_by_guild_id = AsyncMock(return_value=[])
    storage.get_raid_progresses_by_guild_id = AsyncMock(return_value=[])
    storage.get_raid_bosses_by_guild_id = AsyncMock(return_value=[])
    storage.create_application = AsyncMock(return_value=APPLICATION)
    storage.get_applications = AsyncMock(return_value=[APPLICATION])
    storage.change_application_status = AsyncMock(return_value=APPLICATION)
    storage.create_application_notification = AsyncMock()
    return storage


@pytest.fixture
def client(mock_storage):
    """TestClient without lifespan, so no database is touched."""
    app = create_application()
    app.dependency_overrides[get_storage] = lambda: mock_storage
    return TestClient(app)


class TestHealth:
    """Tests for /health."""

    def test_reports_dialect(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["dialect"] == "mysql"
        assert body["database"] == "connected"

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={REQUEST_ID_HEADER: "raid-night"})

        assert response.headers[REQUEST_ID_HEADER] == "raid-night"

    def test_request_id_is_generated(self, client):
        assert len(client.get("/health").headers[REQUEST_ID_HEADER]) == 32

    def test_degraded_when_ping_fails(self, client, mock_storage):
        mock_storage.ping.return_value = False

        body = client.get("/health").json()

        assert body["status"] == "degraded"
        assert body["database"] == "unreachable"


class TestGuildRoutes:
    """Tests for guild, roster and raid endpoints."""

    def test_guild_uses_camel_case_fields(self, client):
        response = client.get("/api/guild")

        assert response.status_code == 200
        assert response.json()["memberCount"] == 30

    def test_missing_guild_is_404(self, client, mock_storage):
        mock_storage.get_default_guild.return_value = None

        response = client.get("/api/guild")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_driver_error_is_503(self, client, mock_storage):
        mock_storage.get_default_guild.side_effect = OperationalError("SELECT 1", {}, Exception("gone away"))

        response = client.get("/api/guild")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "DATABASE_UNAVAILABLE"

    def test_roster(self, client, mock_storage):
        mock_storage.get_characters_by_guild_id.return_value = [
            Character(id=3, name="Truedps", class_name="Mage", rank=0, level=80, guild_id=1, raider_io_score=2451)
        ]

        response = client.get("/api/roster")

        assert response.status_code == 200
        assert response.json()[0]["raiderIoScore"] == 2451
        mock_storage.get_characters_by_guild_id.assert_awaited_once_with(1)

    def test_empty_roster(self, client):
        response = client.get("/api/roster")

        assert response.status_code == 200
        assert response.json() == []

    def test_roster_without_guild_is_empty(self, client, mock_storage):
        mock_storage.get_default_guild.return_value = None

        assert client.get("/api/roster").json() == []
        mock_storage.get_characters_by_guild_id.assert_not_awaited()

    def test_raid_bosses_default_to_mythic(self, client, mock_storage):
        mock_storage.get_raid_bosses_by_guild_id.return_value = [
            RaidBoss(id=1, name="Vexie", raid_name="Liberation of Undermine", guild_id=1, warcraft_logs_id="w-1")
        ]

        response = client.get("/api/raid-bosses", params={"raidName": "Liberation of Undermine"})

        assert response.status_code == 200
        assert response.json()[0]["warcraftLogsId"] == "w-1"
        mock_storage.get_raid_bosses_by_guild_id.assert_awaited_once_with(1, "Liberation of Undermine", "mythic")

    def test_raid_bosses_reject_unknown_difficulty(self, client):
        assert client.get("/api/raid-bosses", params={"difficulty": "lfr"}).status_code == 422

    def test_raid_progress(self, client):
        assert client.get("/api/raid-progress").json() == []


class TestApplicationRoutes:
    """Tests for recruitment endpoints."""

    def test_submit_application(self, client, mock_storage):
        response = client.post("/api/applications", json=FORM)

        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        submitted = mock_storage.create_application.await_args.args[0]
        assert submitted.raiders == "Holypal"
        notification = mock_storage.create_application_notification.await_args.args[0]
        assert notification == {"applicationId": 7, "notificationType": "new"}

    def test_failed_notification_keeps_the_submission(self, client, mock_storage):
        mock_storage.create_application_notification.side_effect = StorageError("create", "application notification")

        response = client.post("/api/applications", json=FORM)

        assert response.status_code == 201
        assert response.json()["id"] == 7
        mock_storage.create_application.assert_awaited_once()

    def test_failed_notification_keeps_the_status_change(self, client, mock_storage):
        mock_storage.create_application_notification.side_effect = StorageError("create", "application notification")

        response = client.patch("/api/applications/7/status", json={"status": "approved", "reviewedBy": 2})

        assert response.status_code == 200
        mock_storage.change_application_status.assert_awaited_once()

    def test_failed_write_is_500_with_message(self, client, mock_storage):
        mock_storage.create_application.side_effect = StorageError("create", "application")

        response = client.post("/api/applications", json=FORM)

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Failed to create application"
        assert response.json()["error"]["code"] == "STORAGE_ERROR"

    def test_incomplete_form_is_rejected(self, client):
        response = client.post("/api/applications", json={"characterName": "Truedps"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_list_with_status_filter(self, client, mock_storage):
        response = client.get("/api/applications", params={"status": "pending"})

        assert response.status_code == 200
        assert response.json()[0]["id"] == 7
        mock_storage.get_applications.assert_awaited_once_with("pending")

    def test_list_without_filter(self, client, mock_storage):
        client.get("/api/applications")

        mock_storage.get_applications.assert_awaited_once_with(None)

    def test_change_status(self, client, mock_storage):
        response = client.patch(
            "/api/applications/7/status",
            json={"status": "approved", "reviewedBy": 2, "reviewNotes": "Welcome"},
        )

        assert response.status_code == 200
        mock_storage.change_application_status.assert_awaited_once_with(7, "approved", 2, "Welcome")

    def test_change_status_of_missing_application(self, client, mock_storage):
        mock_storage.change_application_status.return_value = None

        response = client.patch("/api/applications/99/status", json={"status": "rejected", "reviewedBy": 2})

        assert response.status_code == 404
        mock_storage.create_application_notification.assert_not_awaited()
