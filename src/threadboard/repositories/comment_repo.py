"""Data access helpers for working with comments."""
from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from threadboard.models.comment import Comment
from threadboard.models.vote import VoteDirection

__all__ = ["CommentRepository"]


class CommentRepository:
    """Thin wrapper around database access for comment entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_in_thread(self, thread_id: str, comment_id: str) -> Comment | None:
        """Return a comment only if it belongs to ``thread_id``."""
        comment = self.session.get(Comment, comment_id)
        if comment is None or comment.thread_id != thread_id:
            return None
        return comment

    def list_for_thread(self, thread_id: str) -> list[Comment]:
        """Return every comment and reply of a thread, oldest first."""
        result = self.session.execute(
            select(Comment)
            .where(Comment.thread_id == thread_id)
            .order_by(Comment.created_at.asc())
        )
        return list(result.scalars())

    def count_for_thread(self, thread_id: str) -> int:
        """Return the live number of comments and replies in a thread."""
        return self.session.execute(
            select(func.count()).select_from(Comment).where(Comment.thread_id == thread_id)
        ).scalar_one()

    def create(
        self,
        *,
        thread_id: str,
        author_id: str,
        content: str,
        parent_id: str | None = None,
    ) -> Comment:
        """Insert a new comment and return the persisted ORM instance."""
        comment = Comment(
            thread_id=thread_id,
            parent_id=parent_id,
            author_id=author_id,
            content=content,
            upvotes=1,
            downvotes=0,
        )
        self.session.add(comment)
        self.session.flush()
        return comment

    def increment_vote(self, comment_id: str, direction: VoteDirection) -> bool:
        """Atomically add one to the vote counter for ``direction``."""
        column = getattr(Comment, direction.counter)
        result = self.session.execute(
            update(Comment)
            .where(Comment.id == comment_id)
            .values({column: column + 1})
        )
        return bool(result.rowcount)

    def orphan_author(self, author_id: str) -> int:
        """Detach every comment from a deleted author; returns rows touched."""
        result = self.session.execute(
            update(Comment).where(Comment.author_id == author_id).values(author_id=None)
        )
        return result.rowcount or 0
