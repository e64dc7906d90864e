"""Thread, comment and vote endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from threadboard.schemas.thread import (
    CommentCreate,
    CommentOut,
    ThreadCreate,
    ThreadDetailOut,
    ThreadOut,
    VoteRequest,
    VoteResult,
)
from threadboard.services import content

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/threads", tags=["threads"])


@router.get("/", response_model=list[ThreadOut])
async def list_threads(
    db: SessionDep,
    limit: int | None = Query(None, ge=1, le=500, description="Maximum number of threads"),
) -> list[ThreadOut]:
    """List threads newest first."""
    return [ThreadOut.model_validate(t) for t in content.list_threads(db, limit)]


@router.post("/", response_model=ThreadDetailOut, status_code=status.HTTP_201_CREATED)
async def create_thread(
    payload: ThreadCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> ThreadDetailOut:
    """Start a new thread."""
    thread = content.create_thread(db, current_user.id, payload.title, payload.content)
    return content.to_thread_detail_out(content.get_thread(db, thread.id))


@router.get("/{thread_id}", response_model=ThreadDetailOut)
async def get_thread(thread_id: str, db: SessionDep) -> ThreadDetailOut:
    """Return a thread with its nested comments."""
    return content.to_thread_detail_out(content.get_thread(db, thread_id))


@router.post(
    "/{thread_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    thread_id: str,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> CommentOut:
    """Comment on a thread, or reply to one of its comments."""
    comment = content.add_comment(
        db, thread_id, current_user.id, payload.content, payload.parent_id
    )
    return CommentOut.model_validate(comment)


@router.post("/{thread_id}/vote", response_model=VoteResult)
async def vote_thread(
    thread_id: str,
    payload: VoteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResult:
    """Up- or down-vote a thread."""
    thread = content.vote_thread(db, thread_id, payload.direction, current_user.id)
    return VoteResult(upvotes=thread.upvotes, downvotes=thread.downvotes, score=thread.score)


@router.post("/{thread_id}/comments/{comment_id}/vote", response_model=VoteResult)
async def vote_comment(
    thread_id: str,
    comment_id: str,
    payload: VoteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteResult:
    """Up- or down-vote a comment."""
    comment = content.vote_comment(
        db, thread_id, comment_id, payload.direction, current_user.id
    )
    return VoteResult(upvotes=comment.upvotes, downvotes=comment.downvotes, score=comment.score)
