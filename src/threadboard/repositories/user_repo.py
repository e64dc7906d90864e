"""Data access helpers for users and follow edges."""
from __future__ import annotations

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from threadboard.models.user import Follow, User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Return a user by email address."""
        result = self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    def get_by_username(self, username: str) -> User | None:
        """Return a user by username."""
        result = self.session.execute(select(User).where(User.username == username))
        return result.scalars().first()

    def find_by_email_or_username(self, email: str, username: str) -> User | None:
        """Return any user holding either the email or the username."""
        result = self.session.execute(
            select(User).where(or_(User.email == email, User.username == username))
        )
        return result.scalars().first()

    def email_taken_by_other(self, email: str, user_id: str) -> bool:
        """Return True if ``email`` belongs to a user other than ``user_id``."""
        result = self.session.execute(
            select(User.id).where(User.email == email, User.id != user_id)
        )
        return result.first() is not None

    def list_all(self) -> list[User]:
        """Return every user ordered by creation time."""
        result = self.session.execute(select(User).order_by(User.created_at.asc()))
        return list(result.scalars())

    def create(
        self,
        *,
        email: str,
        username: str,
        display_name: str | None,
        avatar_url: str | None,
        password_hash: str,
        is_admin: bool = False,
        is_owner: bool = False,
    ) -> User:
        """Insert a new user and return the persisted ORM instance."""
        user = User(
            email=email,
            username=username,
            display_name=display_name,
            avatar_url=avatar_url,
            password_hash=password_hash,
            is_admin=is_admin,
            is_owner=is_owner,
        )
        self.session.add(user)
        self.session.flush()
        return user

    def delete(self, user: User) -> None:
        """Remove the user row."""
        self.session.delete(user)
        self.session.flush()

    # Follow graph

    def get_follow(self, follower_id: str, following_id: str) -> Follow | None:
        """Return the follow edge if it exists."""
        return self.session.get(Follow, (follower_id, following_id))

    def add_follow(self, follower_id: str, following_id: str) -> Follow:
        """Insert a follow edge."""
        edge = Follow(follower_id=follower_id, following_id=following_id)
        self.session.add(edge)
        self.session.flush()
        return edge

    def remove_follow(self, follower_id: str, following_id: str) -> int:
        """Delete a follow edge; returns the number of rows removed."""
        result = self.session.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.rowcount or 0

    def remove_all_follows(self, user_id: str) -> int:
        """Delete every edge where the user is follower or followee."""
        result = self.session.execute(
            delete(Follow).where(
                or_(Follow.follower_id == user_id, Follow.following_id == user_id)
            )
        )
        return result.rowcount or 0

    def follower_ids(self, user_id: str) -> list[str]:
        """Return ids of users following ``user_id``."""
        result = self.session.execute(
            select(Follow.follower_id).where(Follow.following_id == user_id)
        )
        return list(result.scalars())

    def following_ids(self, user_id: str) -> list[str]:
        """Return ids of users that ``user_id`` follows."""
        result = self.session.execute(
            select(Follow.following_id).where(Follow.follower_id == user_id)
        )
        return list(result.scalars())

    def count_follows(self) -> int:
        """Return the total number of follow edges."""
        return self.session.execute(select(func.count()).select_from(Follow)).scalar_one()
