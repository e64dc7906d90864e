"""Cascading removal of a user's footprint."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from threadboard.models.user import User
from threadboard.repositories.comment_repo import CommentRepository
from threadboard.repositories.notification_repo import NotificationRepository
from threadboard.repositories.thread_repo import ThreadRepository
from threadboard.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


def purge_user(db: Session, user: User) -> None:
    """Anonymise authored content, drop social edges and delete the account.

    Must run inside the caller's transaction. Steps run in dependency order so
    no row is left referencing the user when the user row goes away:

    1. threads and comments lose their author (rendered as "Deleted User");
    2. follow edges in both directions are removed;
    3. "followed you" notifications about the user keep existing for their
       recipients with no actor, every other notification the user received
       or caused is removed;
    4. the user row is deleted.
    """
    user_id = user.id
    threads = ThreadRepository(db).orphan_author(user_id)
    comments = CommentRepository(db).orphan_author(user_id)
    users = UserRepository(db)
    edges = users.remove_all_follows(user_id)
    kept, dropped = NotificationRepository(db).purge_for_user(user_id)
    users.delete(user)
    logger.info(
        "Deleted user %s: %d threads and %d comments anonymised, "
        "%d follow edges removed, %d notifications kept, %d removed",
        user_id,
        threads,
        comments,
        edges,
        kept,
        dropped,
    )
