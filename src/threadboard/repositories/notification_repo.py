"""Data access helpers for notifications."""
from __future__ import annotations

from typing import Any

from sqlalchemy import and_, delete, func, not_, or_, select, update
from sqlalchemy.orm import Session

from threadboard.models.notification import EntityType, Notification

__all__ = ["NotificationRepository"]


class NotificationRepository:
    """Thin wrapper around database access for notification entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def create(
        self,
        *,
        user_id: str,
        type_: str,
        actor_id: str | None,
        entity_id: str,
        entity_type: str,
        related_entity_id: str | None,
        content_key: str,
        content_args: dict[str, Any],
        link: str,
    ) -> Notification:
        """Insert an unread notification and return it."""
        notification = Notification(
            user_id=user_id,
            type=type_,
            actor_id=actor_id,
            entity_id=entity_id,
            entity_type=entity_type,
            related_entity_id=related_entity_id,
            content_key=content_key,
            content_args=content_args,
            link=link,
            is_read=False,
        )
        self.session.add(notification)
        self.session.flush()
        return notification

    def list_for_user(self, user_id: str) -> list[Notification]:
        """Return a user's notifications newest first."""
        result = self.session.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        return list(result.scalars())

    def unread_count(self, user_id: str) -> int:
        """Return the number of unread notifications for a user."""
        return self.session.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        ).scalar_one()

    def mark_read(self, notification_id: str, user_id: str) -> int:
        """Mark one notification read if owned by ``user_id``."""
        result = self.session.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.user_id == user_id)
            .values(is_read=True)
        )
        return result.rowcount or 0

    def mark_all_read(self, user_id: str) -> int:
        """Mark every notification of a user read."""
        result = self.session.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        return result.rowcount or 0

    def purge_for_user(self, user_id: str) -> tuple[int, int]:
        """Remove a deleted user's notification footprint.

        "X followed you" notifications about the user, held by other
        recipients, lose their actor but survive. Everything else where the
        user is recipient or actor is deleted.

        Returns:
            ``(kept, deleted)`` row counts.
        """
        follow_notice = and_(
            Notification.entity_type == EntityType.USER.value,
            Notification.entity_id == user_id,
            Notification.user_id != user_id,
        )
        kept = self.session.execute(
            update(Notification).where(follow_notice).values(actor_id=None)
        ).rowcount or 0
        deleted = self.session.execute(
            delete(Notification).where(
                or_(
                    Notification.user_id == user_id,
                    and_(Notification.actor_id == user_id, not_(follow_notice)),
                )
            )
        ).rowcount or 0
        return kept, deleted
