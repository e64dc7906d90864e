"""SQLAlchemy model for comments and nested replies."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from threadboard.db.ids import new_id
from threadboard.db.session import Base
from threadboard.db.time import utcnow
from threadboard.models.user import User


class Comment(Base):
    """A comment on a thread, or a reply to another comment.

    Comments are stored flat; ``parent_id`` points at the parent comment in the
    same thread (NULL for top-level comments).
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_comments_upvotes_non_negative"),
        CheckConstraint("downvotes >= 0", name="ck_comments_downvotes_non_negative"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    thread_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    )
    author_id: Mapped[str | None] = mapped_column(
        String(32),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author: Mapped[User | None] = relationship("User", lazy="joined")

    @property
    def score(self) -> int:
        """Display score; never stored."""
        return self.upvotes - self.downvotes
