"""SQLAlchemy model for discussion threads."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadboard.db.ids import new_id
from threadboard.db.session import Base
from threadboard.db.time import utcnow
from threadboard.models.user import User


class Thread(Base):
    """Top-level discussion started by a user.

    ``author_id`` is NULL once the author's account has been deleted; the
    thread itself is kept.
    """

    __tablename__ = "threads"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_threads_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_threads_downvotes_non_negative"),
        CheckConstraint("comment_count >= 0", name="ck_threads_comment_count_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    # The author's implicit upvote.
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Denormalised count of every comment and reply in the thread.
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped[User | None] = relationship("User", lazy="joined")

    @property
    def score(self) -> int:
        """Display score; never stored."""
        return self.upvotes - self.downvotes
