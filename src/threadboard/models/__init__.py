# src/threadboard/models/__init__.py
"""SQLAlchemy models for the Threadboard application."""

from .comment import Comment
from .notification import EntityType, Notification, NotificationType
from .thread import Thread
from .user import Follow, User
from .vote import VoteDirection

__all__ = [
    "Comment",
    "EntityType", "Notification", "NotificationType",
    "Thread",
    "Follow", "User",
    "VoteDirection",
]
