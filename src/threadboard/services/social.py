"""Follow graph mutations."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from threadboard.core.errors import Conflict, Forbidden, NotFound
from threadboard.db.session import transaction
from threadboard.models.notification import EntityType, NotificationType
from threadboard.models.user import DELETED_USER_ID, Follow
from threadboard.repositories.user_repo import UserRepository
from threadboard.services import notifications

logger = logging.getLogger(__name__)


def follow(db: Session, target_id: str, follower_id: str) -> Follow:
    """Make ``follower_id`` follow ``target_id`` and notify the target.

    Raises:
        Forbidden: If the target is the deleted-user placeholder or the follower.
        NotFound: If either user does not exist.
        Conflict: If the edge already exists.
    """
    if target_id == DELETED_USER_ID:
        raise Forbidden("Cannot follow this user.")
    with transaction(db):
        users = UserRepository(db)
        target = users.get_by_id(target_id)
        follower = users.get_by_id(follower_id)
        if target is None or follower is None:
            raise NotFound("User not found.")
        if target.id == follower.id:
            raise Forbidden("You cannot follow yourself.")
        if users.get_follow(follower.id, target.id) is not None:
            raise Conflict("Already following this user.")

        edge = users.add_follow(follower.id, target.id)
        notifications.emit(
            db,
            target.id,
            NotificationType.USER_FOLLOWED_YOU,
            follower.id,
            follower.id,
            EntityType.USER,
            None,
            "notification.userFollowedYou",
            {"actorName": follower.name},
        )
    logger.info("User %s now follows %s", follower_id, target_id)
    return edge


def unfollow(db: Session, target_id: str, follower_id: str) -> None:
    """Remove the edge if present; calling it again is a no-op."""
    with transaction(db):
        users = UserRepository(db)
        if users.get_by_id(target_id) is None or users.get_by_id(follower_id) is None:
            raise NotFound("User not found.")
        users.remove_follow(follower_id, target_id)
