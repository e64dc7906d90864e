"""Data access helpers for working with threads."""
from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from threadboard.models.thread import Thread
from threadboard.models.vote import VoteDirection

__all__ = ["ThreadRepository"]


class ThreadRepository:
    """Thin wrapper around database access for thread entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, thread_id: str) -> Thread | None:
        """Return a thread by identifier."""
        return self.session.get(Thread, thread_id)

    def list_recent(self, limit: int | None = None) -> list[Thread]:
        """Return threads newest first."""
        stmt = select(Thread).order_by(Thread.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.session.execute(stmt).scalars())

    def list_by_author(self, author_id: str) -> list[Thread]:
        """Return threads written by ``author_id`` newest first."""
        result = self.session.execute(
            select(Thread)
            .where(Thread.author_id == author_id)
            .order_by(Thread.created_at.desc())
        )
        return list(result.scalars())

    def create(self, *, author_id: str, title: str, content: str) -> Thread:
        """Insert a new thread and return the persisted ORM instance.

        Counters start at one upvote (the author's own), zero downvotes and
        zero comments.
        """
        thread = Thread(
            author_id=author_id,
            title=title,
            content=content,
            upvotes=1,
            downvotes=0,
            comment_count=0,
        )
        self.session.add(thread)
        self.session.flush()
        return thread

    def increment_vote(self, thread_id: str, direction: VoteDirection) -> bool:
        """Atomically add one to the vote counter for ``direction``.

        Returns:
            False if no thread matched.
        """
        column = getattr(Thread, direction.counter)
        result = self.session.execute(
            update(Thread)
            .where(Thread.id == thread_id)
            .values({column: column + 1})
        )
        return bool(result.rowcount)

    def increment_comment_count(self, thread_id: str) -> None:
        """Atomically add one to the denormalised comment counter."""
        self.session.execute(
            update(Thread)
            .where(Thread.id == thread_id)
            .values(comment_count=Thread.comment_count + 1)
        )

    def orphan_author(self, author_id: str) -> int:
        """Detach every thread from a deleted author; returns rows touched."""
        result = self.session.execute(
            update(Thread).where(Thread.author_id == author_id).values(author_id=None)
        )
        return result.rowcount or 0
