"""Notification derivation, storage and read-state queries.

Notifications are stored as a content key plus arguments; the client renders
them per locale. Links are computed once, at emission time, from a fixed
table keyed by notification type.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from threadboard.core.errors import NotFound
from threadboard.db.session import transaction
from threadboard.models.notification import EntityType, Notification, NotificationType
from threadboard.repositories.notification_repo import NotificationRepository
from threadboard.repositories.thread_repo import ThreadRepository
from threadboard.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

FALLBACK_ACTOR_NAME = "Someone"
FALLBACK_THREAD_TITLE = "a thread"

__all__ = [
    "build_link",
    "emit",
    "list_for_user",
    "unread_count",
    "mark_read",
    "mark_all_read",
]


def build_link(
    type_: NotificationType,
    entity_id: str,
    related_entity_id: str | None,
    actor_username: str | None,
) -> str:
    """Return the deep link a notification points at."""
    if type_ in (
        NotificationType.NEW_THREAD_FROM_FOLLOWED_USER,
        NotificationType.THREAD_UPVOTE,
        NotificationType.THREAD_DOWNVOTE,
    ):
        return f"/thread/{entity_id}"
    if type_ in (
        NotificationType.NEW_COMMENT_ON_THREAD,
        NotificationType.NEW_REPLY_TO_COMMENT,
        NotificationType.COMMENT_UPVOTE,
        NotificationType.COMMENT_DOWNVOTE,
    ):
        return f"/thread/{related_entity_id}#comment-{entity_id}"
    if type_ is NotificationType.USER_FOLLOWED_YOU:
        if not actor_username:
            raise ValueError("Follow notifications need an actor.")
        return f"/user/{actor_username}"
    raise ValueError(f"Unknown notification type: {type_!r}")


def _related_thread_title(
    db: Session,
    entity_type: EntityType,
    entity_id: str,
    related_entity_id: str | None,
) -> str:
    thread_id = None
    if entity_type is EntityType.THREAD:
        thread_id = entity_id
    elif entity_type is EntityType.COMMENT:
        thread_id = related_entity_id
    if thread_id is None:
        return FALLBACK_THREAD_TITLE
    thread = ThreadRepository(db).get_by_id(thread_id)
    return thread.title if thread is not None else FALLBACK_THREAD_TITLE


def emit(
    db: Session,
    recipient_id: str,
    type_: NotificationType,
    actor_id: str | None,
    entity_id: str,
    entity_type: EntityType,
    related_entity_id: str | None = None,
    content_key: str | None = None,
    content_args: dict[str, Any] | None = None,
) -> Notification | None:
    """Store a notification for ``recipient_id``.

    Runs inside the caller's transaction and never commits.

    Args:
        db: Database session.
        recipient_id: User who receives the notification.
        type_: Event type.
        actor_id: User who caused the event, if any.
        entity_id: Primary entity (thread, comment or user id).
        entity_type: Kind of ``entity_id``.
        related_entity_id: Parent thread for comment events.
        content_key: Template key; defaults to ``notification.default.<type>``.
        content_args: Template arguments; defaults to actor name and item title.

    Returns:
        The stored notification, or None when a self-vote was suppressed.

    Raises:
        NotFound: If ``actor_id`` does not belong to a user.
        ValueError: If a follow notification has no actor.
    """
    type_ = NotificationType(type_)
    entity_type = EntityType(entity_type)

    if actor_id is not None and actor_id == recipient_id and type_.is_vote:
        return None

    actor = UserRepository(db).get_by_id(actor_id) if actor_id else None
    if actor_id and actor is None:
        raise NotFound("User not found.")
    actor_name = actor.name if actor is not None else FALLBACK_ACTOR_NAME

    if content_key is None:
        content_key = f"notification.default.{type_.value}"
    if content_args is None:
        if entity_type is EntityType.THREAD:
            item_title = _related_thread_title(db, entity_type, entity_id, related_entity_id)
        elif entity_type is EntityType.COMMENT:
            item_title = "your comment"
        else:
            item_title = "you"
        content_args = {"actorName": actor_name, "itemTitle": item_title}

    link = build_link(
        type_,
        entity_id,
        related_entity_id,
        actor.username if actor is not None else None,
    )

    notification = NotificationRepository(db).create(
        user_id=recipient_id,
        type_=type_.value,
        actor_id=actor_id,
        entity_id=entity_id,
        entity_type=entity_type.value,
        related_entity_id=related_entity_id,
        content_key=content_key,
        content_args=content_args,
        link=link,
    )
    logger.debug(
        "Notification %s (%s) queued for user %s", notification.id, type_.value, recipient_id
    )
    return notification


def list_for_user(db: Session, user_id: str) -> list[Notification]:
    """Return the user's notifications newest first."""
    return NotificationRepository(db).list_for_user(user_id)


def unread_count(db: Session, user_id: str) -> int:
    """Return how many of the user's notifications are unread."""
    return NotificationRepository(db).unread_count(user_id)


def mark_read(db: Session, notification_id: str, user_id: str) -> None:
    """Mark one notification read; silently ignores ones the user does not own."""
    with transaction(db):
        NotificationRepository(db).mark_read(notification_id, user_id)


def mark_all_read(db: Session, user_id: str) -> None:
    """Mark every notification of the user read."""
    with transaction(db):
        NotificationRepository(db).mark_all_read(user_id)
