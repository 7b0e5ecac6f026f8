"""
Recruitment Handler

Application submission and review.

    POST  /api/applications               public form
    GET   /api/applications?status=...    admin list, newest first
    PATCH /api/applications/{id}/status   admin decision

A failed write surfaces as a StorageError, which the error handler turns
into a 500 with the "Failed to <operation> <entity>" message.
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from guttakrutt.api.dependencies import StorageDep
from guttakrutt.shared.core.exceptions import NotFoundError, StorageError
from guttakrutt.shared.core.logging import logger
from guttakrutt.shared.schemas import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
    ApplicationStatusChange,
    ErrorResponse,
    NotificationType,
)


router = APIRouter()


@router.post(
    "",
    response_model=Application,
    status_code=status.HTTP_201_CREATED,
    responses={500: {"model": ErrorResponse, "description": "Application could not be stored"}},
)
async def submit_application(request: ApplicationCreate, storage: StorageDep):
    """
    Store a new application (status pending) and notify the admins.

    The application is already stored when the notification is written, so
    a failed notification is logged and the submission still succeeds.
    """
    application = await storage.create_application(request)
    try:
        await storage.create_application_notification(
            {
                "applicationId": application.id,
                "notificationType": NotificationType.NEW.value,
            }
        )
    except StorageError as exc:
        logger.error(
            "Application notification not stored",
            application_id=application.id,
            error=exc.message,
        )
    logger.info(
        "Application submitted",
        application_id=application.id,
        character=application.character_name,
    )
    return application


@router.get("", response_model=list[Application])
async def list_applications(
    storage: StorageDep,
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
):
    """Applications, newest first, optionally one status."""
    return await storage.get_applications(status_filter.value if status_filter else None)


@router.patch(
    "/{application_id}/status",
    response_model=Application,
    responses={404: {"model": ErrorResponse, "description": "Application not found"}},
)
async def change_application_status(
    application_id: int,
    request: ApplicationStatusChange,
    storage: StorageDep,
):
    """
    Record an admin decision on an application.

    Raises:
        NotFoundError: No application with that id
    """
    application = await storage.change_application_status(
        application_id,
        request.status,
        request.reviewed_by,
        request.review_notes,
    )
    if application is None:
        raise NotFoundError("Application", application_id)

    try:
        await storage.create_application_notification(
            {
                "applicationId": application.id,
                "adminId": request.reviewed_by,
                "notificationType": NotificationType.STATUS_CHANGE.value,
            }
        )
    except StorageError as exc:
        logger.error(
            "Application notification not stored",
            application_id=application.id,
            error=exc.message,
        )
    return application
