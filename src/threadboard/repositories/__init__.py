"""Data access layer wrapping the SQLAlchemy session."""

from .comment_repo import CommentRepository
from .notification_repo import NotificationRepository
from .thread_repo import ThreadRepository
from .user_repo import UserRepository

__all__ = [
    "CommentRepository",
    "NotificationRepository",
    "ThreadRepository",
    "UserRepository",
]
