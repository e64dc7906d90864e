"""Notification inbox endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from threadboard.schemas.common import StatusResponse
from threadboard.schemas.notification import NotificationOut, UnreadCountOut
from threadboard.services import notifications

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationOut])
async def list_notifications(current_user: CurrentUserDep, db: SessionDep) -> list[NotificationOut]:
    """Return the caller's notifications, newest first."""
    return [
        NotificationOut.model_validate(n)
        for n in notifications.list_for_user(db, current_user.id)
    ]


@router.get("/unread-count", response_model=UnreadCountOut)
async def unread_count(current_user: CurrentUserDep, db: SessionDep) -> UnreadCountOut:
    """Return how many notifications are unread."""
    return UnreadCountOut(count=notifications.unread_count(db, current_user.id))


@router.post("/read-all", response_model=StatusResponse)
async def mark_all_read(current_user: CurrentUserDep, db: SessionDep) -> StatusResponse:
    """Mark every notification read."""
    notifications.mark_all_read(db, current_user.id)
    return StatusResponse()


@router.post("/{notification_id}/read", response_model=StatusResponse)
async def mark_read(
    notification_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusResponse:
    """Mark one notification read; other users' notifications are left alone."""
    notifications.mark_read(db, notification_id, current_user.id)
    return StatusResponse()
