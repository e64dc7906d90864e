"""Role-gated user management for admins and owners."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from threadboard.core.errors import Forbidden, NotFound, SelfActionNotAllowed
from threadboard.db.session import transaction
from threadboard.models.user import User
from threadboard.repositories.user_repo import UserRepository
from threadboard.services.deletion import purge_user
from threadboard.services.identity import create_account

logger = logging.getLogger(__name__)


def _acting_user(users: UserRepository, acting_user_id: str) -> User:
    acting = users.get_by_id(acting_user_id)
    if acting is None:
        raise NotFound("Current user not found.")
    return acting


def _require_staff(acting: User) -> None:
    if not acting.is_staff:
        logger.warning("User %s attempted an admin-only action", acting.id)
        raise Forbidden("Unauthorized: Only admins or owners can perform this action.")


def list_users_for_admin(db: Session, acting_user_id: str) -> list[User]:
    """Return every account for the admin console."""
    users = UserRepository(db)
    _require_staff(_acting_user(users, acting_user_id))
    return users.list_all()


def create_user(
    db: Session,
    acting_user_id: str,
    *,
    email: str,
    username: str,
    password: str,
    display_name: str | None = None,
    is_admin: bool = False,
) -> User:
    """Provision an account on behalf of staff.

    Admins and owners may create regular accounts; only owners may create
    admin accounts. Owner accounts are never created here.
    """
    with transaction(db):
        acting = _acting_user(UserRepository(db), acting_user_id)
        _require_staff(acting)
        if is_admin and not acting.is_owner:
            raise Forbidden("Only an owner can create admin accounts.")
        user = create_account(
            db,
            email=email,
            username=username,
            password=password,
            display_name=display_name,
            is_admin=is_admin,
        )
    logger.info("User %s provisioned by %s (admin=%s)", user.id, acting_user_id, is_admin)
    return user


def set_admin_status(
    db: Session, target_id: str, make_admin: bool, acting_user_id: str
) -> User:
    """Grant or revoke admin rights; owner only.

    Raises:
        Forbidden: If the acting user is not an owner, the target is an owner,
            or an owner tries to demote themselves.
        NotFound: If the target does not exist.
    """
    with transaction(db):
        users = UserRepository(db)
        acting = users.get_by_id(acting_user_id)
        if acting is None or not acting.is_owner:
            logger.warning("User %s attempted to change admin status", acting_user_id)
            raise Forbidden("Unauthorized: Only an owner can perform this action.")
        target = users.get_by_id(target_id)
        if target is None:
            raise NotFound("Target user not found.")
        if target.id == acting.id and not make_admin:
            raise Forbidden("Owner cannot remove their own admin status.")
        if target.is_owner:
            raise Forbidden("Cannot change the admin status of an owner.")
        target.is_admin = make_admin
    logger.info("Admin status of %s set to %s by %s", target_id, make_admin, acting_user_id)
    return target


def delete_user(db: Session, target_id: str, acting_user_id: str) -> None:
    """Delete another user's account and anonymise their content.

    Raises:
        NotFound: If either user is missing.
        Forbidden: If the target is an owner, the target is an admin and the
            acting user is not an owner, or the acting user is not staff.
        SelfActionNotAllowed: If the acting user targets themselves.
    """
    with transaction(db):
        users = UserRepository(db)
        acting = _acting_user(users, acting_user_id)
        target = users.get_by_id(target_id)
        if target is None:
            raise NotFound("Target user not found.")
        if target.is_owner:
            raise Forbidden("Cannot delete an owner account.")
        if target.is_admin and not acting.is_owner:
            raise Forbidden("Only an owner can delete an admin account.")
        if target.id == acting.id:
            raise SelfActionNotAllowed("Cannot delete yourself.")
        _require_staff(acting)
        purge_user(db, target)
    logger.info("User %s deleted by %s", target_id, acting_user_id)
