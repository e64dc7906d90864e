"""SQLAlchemy models for user accounts and the follow graph."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.ids import new_id
from threadboard.db.session import Base
from threadboard.db.time import utcnow

# Reserved identity of the "deleted user" shown in place of removed authors.
# No row ever carries these values.
DELETED_USER_ID = "deleted_user_placeholder"
DELETED_USERNAME = "deleted_user"
DELETED_DISPLAY_NAME = "Deleted User"

AVATAR_PLACEHOLDER_URL = "https://placehold.co/40x40.png?text={initial}"


def default_avatar_url(display_name: str | None, username: str) -> str:
    """Return the placeholder avatar derived from the display initial."""
    source = display_name or username
    initial = source[:1].upper() or "?"
    return AVATAR_PLACEHOLDER_URL.format(initial=initial)


class User(Base):
    """A registered forum account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_owner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def name(self) -> str:
        """Human-readable name: display name, falling back to username."""
        return self.display_name or self.username

    @property
    def is_staff(self) -> bool:
        """Owners count as admins for viewing purposes."""
        return self.is_admin or self.is_owner


class Follow(Base):
    """Directed follow edge: ``follower_id`` follows ``following_id``."""

    __tablename__ = "followers"
    __table_args__ = (
        CheckConstraint("follower_id <> following_id", name="ck_followers_no_self_follow"),
    )

    # Composite primary key prevents duplicate edges.
    follower_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    following_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
