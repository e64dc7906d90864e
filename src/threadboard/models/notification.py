"""SQLAlchemy model for per-user notifications."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.ids import new_id
from threadboard.db.session import Base
from threadboard.db.time import utcnow


class NotificationType(str, enum.Enum):
    """Events a user can be notified about."""

    NEW_THREAD_FROM_FOLLOWED_USER = "new_thread_from_followed_user"
    NEW_COMMENT_ON_THREAD = "new_comment_on_thread"
    NEW_REPLY_TO_COMMENT = "new_reply_to_comment"
    USER_FOLLOWED_YOU = "user_followed_you"
    THREAD_UPVOTE = "thread_upvote"
    THREAD_DOWNVOTE = "thread_downvote"
    COMMENT_UPVOTE = "comment_upvote"
    COMMENT_DOWNVOTE = "comment_downvote"

    @property
    def is_vote(self) -> bool:
        return self in VOTE_NOTIFICATION_TYPES


VOTE_NOTIFICATION_TYPES = frozenset(
    {
        NotificationType.THREAD_UPVOTE,
        NotificationType.THREAD_DOWNVOTE,
        NotificationType.COMMENT_UPVOTE,
        NotificationType.COMMENT_DOWNVOTE,
    }
)


class EntityType(str, enum.Enum):
    """Kind of object a notification is about."""

    THREAD = "thread"
    COMMENT = "comment"
    USER = "user"


class Notification(Base):
    """A notification stored as a template key plus substitution arguments.

    Rendering to text happens in the client, per locale.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    actor_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    entity_id: Mapped[str] = mapped_column(String(32), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(16), nullable=False)
    related_entity_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    content_key: Mapped[str] = mapped_column(Text, nullable=False)
    content_args: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    link: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
