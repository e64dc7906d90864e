"""Threads, comments and votes.

Comments are stored flat with a ``parent_id`` back-reference; every read
path that needs the nested shape goes through :func:`build_comment_tree`.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from threadboard.core.errors import NotFound, ValidationError
from threadboard.db.session import transaction
from threadboard.models.comment import Comment
from threadboard.models.notification import EntityType, NotificationType
from threadboard.models.thread import Thread
from threadboard.models.user import User
from threadboard.models.vote import VoteDirection
from threadboard.repositories.comment_repo import CommentRepository
from threadboard.repositories.thread_repo import ThreadRepository
from threadboard.repositories.user_repo import UserRepository
from threadboard.schemas.thread import CommentOut, ThreadDetailOut, ThreadOut
from threadboard.services import notifications

logger = logging.getLogger(__name__)

__all__ = [
    "CommentNode",
    "ThreadDetail",
    "build_comment_tree",
    "create_thread",
    "add_comment",
    "vote_thread",
    "vote_comment",
    "list_threads",
    "get_thread",
    "list_threads_by_author_username",
    "to_thread_detail_out",
]


@dataclass
class CommentNode:
    """A comment together with its direct replies."""

    comment: Comment
    replies: list[CommentNode] = field(default_factory=list)

    def walk(self) -> Iterable[Comment]:
        """Yield this comment and every descendant depth-first."""
        yield self.comment
        for reply in self.replies:
            yield from reply.walk()


@dataclass
class ThreadDetail:
    """A thread and its assembled comment tree."""

    thread: Thread
    comments: list[CommentNode]


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Assemble flat comment rows into a tree.

    Args:
        comments: Rows of a single thread, oldest first.

    Returns:
        Top-level nodes newest first; replies at every depth stay oldest first.
    """
    nodes: dict[str, CommentNode] = {}
    ordered: list[CommentNode] = []
    for comment in comments:
        node = CommentNode(comment)
        nodes[comment.id] = node
        ordered.append(node)

    roots: list[CommentNode] = []
    for node in ordered:
        parent = nodes.get(node.comment.parent_id) if node.comment.parent_id else None
        if parent is None:
            roots.append(node)
        else:
            parent.replies.append(node)
    roots.reverse()
    return roots


def _require_text(value: str | None, message: str) -> str:
    # Blank means empty, but the text is stored exactly as written.
    if not (value or "").strip():
        raise ValidationError(message)
    return value


def _get_author(db: Session, author_id: str) -> User:
    author = UserRepository(db).get_by_id(author_id)
    if author is None:
        raise NotFound("User not found.")
    return author


def _parse_direction(direction: VoteDirection | str) -> VoteDirection:
    try:
        return VoteDirection(direction)
    except ValueError as err:
        raise ValidationError("Vote direction must be 'up' or 'down'.") from err


def create_thread(db: Session, author_id: str, title: str, content: str) -> Thread:
    """Start a thread and notify the author's followers.

    Raises:
        ValidationError: If title or content is empty.
        NotFound: If the author does not exist.
    """
    title = _require_text(title, "Title and content are required.")
    content = _require_text(content, "Title and content are required.")
    with transaction(db):
        author = _get_author(db, author_id)
        thread = ThreadRepository(db).create(author_id=author.id, title=title, content=content)
        follower_ids = UserRepository(db).follower_ids(author.id)
        for follower_id in follower_ids:
            notifications.emit(
                db,
                follower_id,
                NotificationType.NEW_THREAD_FROM_FOLLOWED_USER,
                author.id,
                thread.id,
                EntityType.THREAD,
                None,
                "notification.newThreadFromFollowedUser",
                {"actorName": author.name, "threadTitle": title},
            )
    logger.info(
        "Thread %s created by %s; %d followers notified", thread.id, author_id, len(follower_ids)
    )
    return thread


def add_comment(
    db: Session,
    thread_id: str,
    author_id: str,
    content: str,
    parent_id: str | None = None,
) -> Comment:
    """Add a top-level comment or a reply and bump the thread's comment count.

    Raises:
        NotFound: If the thread, the author or the parent comment is missing.
        ValidationError: If content is empty.
    """
    with transaction(db):
        threads = ThreadRepository(db)
        comments = CommentRepository(db)
        thread = threads.get_by_id(thread_id)
        if thread is None:
            raise NotFound("Thread not found.")
        content = _require_text(content, "Comment content cannot be empty.")
        author = _get_author(db, author_id)

        parent = None
        if parent_id:
            parent = comments.get_in_thread(thread_id, parent_id)
            if parent is None:
                raise NotFound("Parent comment not found.")

        comment = comments.create(
            thread_id=thread_id,
            author_id=author.id,
            content=content,
            parent_id=parent.id if parent is not None else None,
        )
        threads.increment_comment_count(thread_id)

        args = {"actorName": author.name, "threadTitle": thread.title}
        if thread.author_id is not None and thread.author_id != author.id:
            notifications.emit(
                db,
                thread.author_id,
                NotificationType.NEW_COMMENT_ON_THREAD,
                author.id,
                comment.id,
                EntityType.COMMENT,
                thread_id,
                "notification.newCommentOnThread",
                args,
            )
        if parent is not None and parent.author_id is not None and parent.author_id != author.id:
            notifications.emit(
                db,
                parent.author_id,
                NotificationType.NEW_REPLY_TO_COMMENT,
                author.id,
                comment.id,
                EntityType.COMMENT,
                thread_id,
                "notification.newReplyToComment",
                args,
            )
    return comment


def _get_voter(db: Session, voter_id: str | None) -> User | None:
    if not voter_id:
        return None
    voter = UserRepository(db).get_by_id(voter_id)
    if voter is None:
        raise NotFound("Voter not found.")
    return voter


def vote_thread(
    db: Session,
    thread_id: str,
    direction: VoteDirection | str,
    voter_id: str | None = None,
) -> Thread:
    """Add one vote to a thread; repeated votes keep counting.

    The thread author is notified unless the voter is anonymous, is the
    author, or the author has been deleted.

    Raises:
        ValidationError: If the direction is not "up" or "down".
        NotFound: If the thread or the voter is missing.
    """
    direction = _parse_direction(direction)
    with transaction(db):
        voter = _get_voter(db, voter_id)
        threads = ThreadRepository(db)
        if not threads.increment_vote(thread_id, direction):
            raise NotFound("Thread not found.")
        thread = threads.get_by_id(thread_id)
        if voter is not None and thread.author_id is not None and thread.author_id != voter.id:
            upvote = direction is VoteDirection.UP
            notifications.emit(
                db,
                thread.author_id,
                NotificationType.THREAD_UPVOTE if upvote else NotificationType.THREAD_DOWNVOTE,
                voter.id,
                thread.id,
                EntityType.THREAD,
                None,
                "notification.threadUpvoted" if upvote else "notification.threadDownvoted",
                {"actorName": voter.name, "threadTitle": thread.title},
            )
    return thread


def vote_comment(
    db: Session,
    thread_id: str,
    comment_id: str,
    direction: VoteDirection | str,
    voter_id: str | None = None,
) -> Comment:
    """Add one vote to a comment of ``thread_id``; same rules as thread votes."""
    direction = _parse_direction(direction)
    with transaction(db):
        voter = _get_voter(db, voter_id)
        thread = ThreadRepository(db).get_by_id(thread_id)
        if thread is None:
            raise NotFound("Thread not found.")
        comments = CommentRepository(db)
        comment = comments.get_in_thread(thread_id, comment_id)
        if comment is None:
            raise NotFound("Comment not found.")
        comments.increment_vote(comment_id, direction)
        if voter is not None and comment.author_id is not None and comment.author_id != voter.id:
            upvote = direction is VoteDirection.UP
            notifications.emit(
                db,
                comment.author_id,
                NotificationType.COMMENT_UPVOTE if upvote else NotificationType.COMMENT_DOWNVOTE,
                voter.id,
                comment.id,
                EntityType.COMMENT,
                thread_id,
                "notification.commentUpvoted" if upvote else "notification.commentDownvoted",
                {"actorName": voter.name, "threadTitle": thread.title},
            )
    return comment


def list_threads(db: Session, limit: int | None = None) -> list[Thread]:
    """Return threads newest first."""
    return ThreadRepository(db).list_recent(limit)


def get_thread(db: Session, thread_id: str) -> ThreadDetail:
    """Return a thread with its comment tree."""
    thread = ThreadRepository(db).get_by_id(thread_id)
    if thread is None:
        raise NotFound("Thread not found.")
    rows = CommentRepository(db).list_for_thread(thread_id)
    return ThreadDetail(thread=thread, comments=build_comment_tree(rows))


def list_threads_by_author_username(db: Session, username: str) -> list[Thread]:
    """Return threads written by ``username``; empty if no such user."""
    user = UserRepository(db).get_by_username(username)
    if user is None:
        return []
    return ThreadRepository(db).list_by_author(user.id)


def _comment_out(node: CommentNode) -> CommentOut:
    out = CommentOut.model_validate(node.comment)
    return out.model_copy(update={"replies": [_comment_out(reply) for reply in node.replies]})


def to_thread_detail_out(detail: ThreadDetail) -> ThreadDetailOut:
    """Convert a thread and its tree to the API schema."""
    summary = ThreadOut.model_validate(detail.thread)
    return ThreadDetailOut(
        **summary.model_dump(),
        comments=[_comment_out(node) for node in detail.comments],
    )
