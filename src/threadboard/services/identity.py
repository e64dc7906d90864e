"""Account lifecycle: signup, login, credential changes and profile edits."""
from __future__ import annotations

import logging
import re

from sqlalchemy.orm import Session

from threadboard.core import security
from threadboard.core.errors import (
    Conflict,
    Forbidden,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from threadboard.core.settings import settings
from threadboard.db.session import transaction
from threadboard.models.user import (
    DELETED_USER_ID,
    DELETED_USERNAME,
    User,
    default_avatar_url,
)
from threadboard.repositories.user_repo import UserRepository
from threadboard.schemas.user import ProfileOut, UserOut
from threadboard.services.deletion import purge_user

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")
DISPLAY_NAME_MIN = 2
DISPLAY_NAME_MAX = 50
RESERVED_USERNAMES = frozenset({DELETED_USERNAME, DELETED_USER_ID})

__all__ = [
    "signup",
    "create_account",
    "authenticate",
    "get_user",
    "get_user_by_username",
    "change_password",
    "change_email",
    "update_profile",
    "delete_own_account",
    "to_user_out",
    "to_profile_out",
]


def _validate_email(email: str) -> str:
    email = (email or "").strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("A valid email address is required.")
    return email


def _validate_password(password: str) -> str:
    if not password or len(password) < settings.min_password_length:
        raise ValidationError(
            f"Password must be at least {settings.min_password_length} characters."
        )
    return password


def _validate_display_name(display_name: str | None) -> str | None:
    if display_name is None:
        return None
    display_name = display_name.strip()
    if not DISPLAY_NAME_MIN <= len(display_name) <= DISPLAY_NAME_MAX:
        raise ValidationError(
            f"Display name must be between {DISPLAY_NAME_MIN} and {DISPLAY_NAME_MAX} characters."
        )
    return display_name


def _check_password(user: User, password: str) -> None:
    if not security.verify_password(password or "", user.password_hash):
        raise InvalidCredentials("Incorrect current password.")


def create_account(
    db: Session,
    *,
    email: str,
    username: str,
    password: str,
    display_name: str | None = None,
    is_admin: bool = False,
    is_owner: bool = False,
) -> User:
    """Validate and insert a new account inside the caller's transaction.

    Raises:
        ValidationError: If email, username, display name or password is malformed.
        Conflict: If the email or username is already in use or reserved.
    """
    email = _validate_email(email)
    username = (username or "").strip()
    if not USERNAME_PATTERN.match(username):
        raise ValidationError(
            "Username may only contain letters, digits, '.', '_' and '-'."
        )
    password = _validate_password(password)
    display_name = _validate_display_name(display_name or None)

    if username.lower() in RESERVED_USERNAMES:
        raise Conflict("This username is not available.")

    users = UserRepository(db)
    if users.find_by_email_or_username(email, username) is not None:
        raise Conflict("User with this email or username already exists.")

    display_name = display_name or username
    user = users.create(
        email=email,
        username=username,
        display_name=display_name,
        avatar_url=default_avatar_url(display_name, username),
        password_hash=security.hash_password(password),
        is_admin=is_admin,
        is_owner=is_owner,
    )
    logger.info("Created user %s (%s)", user.id, user.username)
    return user


def signup(
    db: Session,
    email: str,
    username: str,
    password: str,
    display_name: str | None = None,
) -> User:
    """Register a regular (non-admin, non-owner) account."""
    with transaction(db):
        user = create_account(
            db,
            email=email,
            username=username,
            password=password,
            display_name=display_name,
        )
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user owning ``email`` if ``password`` matches.

    Raises:
        InvalidCredentials: For an unknown email and a wrong password alike.
    """
    user = UserRepository(db).get_by_email((email or "").strip())
    if user is None:
        security.burn_password_check(password or "")
        raise InvalidCredentials("Invalid email or password.")
    if not security.verify_password(password or "", user.password_hash):
        raise InvalidCredentials("Invalid email or password.")
    return user


def get_user(db: Session, user_id: str) -> User:
    """Return a user by id or raise NotFound."""
    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise NotFound("User not found.")
    return user


def get_user_by_username(db: Session, username: str) -> User:
    """Return a user by username or raise NotFound."""
    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise NotFound("User not found.")
    return user


def change_password(
    db: Session, user_id: str, current_password: str, new_password: str
) -> None:
    """Replace the password after confirming the current one."""
    with transaction(db):
        user = get_user(db, user_id)
        _check_password(user, current_password)
        user.password_hash = security.hash_password(_validate_password(new_password))
    logger.info("Password changed for user %s", user_id)


def change_email(
    db: Session, user_id: str, new_email: str, current_password: str
) -> User:
    """Change the login email after confirming the password."""
    with transaction(db):
        user = get_user(db, user_id)
        _check_password(user, current_password)
        new_email = _validate_email(new_email)
        if UserRepository(db).email_taken_by_other(new_email, user_id):
            raise Conflict("This email is already in use.")
        user.email = new_email
    return user


def update_profile(
    db: Session,
    user_id: str,
    display_name: str | None = None,
    avatar_url: str | None = None,
) -> User:
    """Apply a partial profile update; None leaves a field unchanged."""
    with transaction(db):
        user = get_user(db, user_id)
        if display_name is not None:
            user.display_name = _validate_display_name(display_name)
        if avatar_url is not None:
            user.avatar_url = avatar_url.strip() or default_avatar_url(
                user.display_name, user.username
            )
    return user


def delete_own_account(db: Session, user_id: str, current_password: str) -> None:
    """Delete the caller's own account after confirming the password.

    Raises:
        InvalidCredentials: If the password does not match.
        Forbidden: If the account is an owner account.
    """
    with transaction(db):
        user = get_user(db, user_id)
        _check_password(user, current_password)
        if user.is_owner:
            raise Forbidden("Owner account cannot be deleted this way.")
        purge_user(db, user)


def to_user_out(db: Session, user: User) -> UserOut:
    """Convert a User ORM instance to the private API schema."""
    users = UserRepository(db)
    return UserOut.model_validate(
        {
            **ProfileOut.model_validate(user).model_dump(),
            "email": user.email,
            "follower_ids": users.follower_ids(user.id),
            "following_ids": users.following_ids(user.id),
        }
    )


def to_profile_out(db: Session, user: User) -> ProfileOut:
    """Convert a User ORM instance to the public profile schema."""
    users = UserRepository(db)
    profile = ProfileOut.model_validate(user)
    return profile.model_copy(
        update={
            "follower_ids": users.follower_ids(user.id),
            "following_ids": users.following_ids(user.id),
        }
    )
