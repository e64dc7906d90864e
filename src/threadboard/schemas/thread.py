# src/threadboard/schemas/thread.py
"""Thread and comment Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from threadboard.models.vote import VoteDirection
from threadboard.schemas.user import AuthorOut


def author_ref(value: Any) -> Any:
    """Map an author row (or None for a deleted author) to an AuthorOut."""
    if value is None or not isinstance(value, (AuthorOut, dict)):
        return AuthorOut.from_user(value)
    return value


class ThreadCreate(BaseModel):
    """Schema for starting a thread."""

    title: str = Field(..., description="Thread title")
    content: str = Field(..., description="Markdown body")


class CommentCreate(BaseModel):
    """Schema for commenting on a thread or replying to a comment."""

    content: str = Field(..., description="Markdown body")
    parent_id: str | None = Field(None, description="Comment being replied to")


class VoteRequest(BaseModel):
    """Schema for casting a vote."""

    direction: VoteDirection


class VoteResult(BaseModel):
    """Counters after a vote."""

    upvotes: int
    downvotes: int
    score: int


class ThreadOut(BaseModel):
    """Thread summary returned by list endpoints."""

    id: str
    title: str
    content: str
    author: AuthorOut
    created_at: datetime
    upvotes: int
    downvotes: int
    score: int
    comment_count: int

    model_config = ConfigDict(from_attributes=True)

    @field_validator("author", mode="before")
    @classmethod
    def coerce_author(cls, value: Any) -> Any:
        return author_ref(value)


class CommentOut(BaseModel):
    """Comment with its nested replies."""

    id: str
    thread_id: str
    parent_id: str | None
    author: AuthorOut
    content: str
    created_at: datetime
    upvotes: int
    downvotes: int
    score: int
    replies: list[CommentOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("author", mode="before")
    @classmethod
    def coerce_author(cls, value: Any) -> Any:
        return author_ref(value)


class ThreadDetailOut(ThreadOut):
    """Thread with its full comment tree."""

    comments: list[CommentOut] = Field(default_factory=list)
