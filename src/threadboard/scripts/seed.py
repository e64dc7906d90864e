"""Create tables, bootstrap the owner account and optionally load demo content."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.orm import Session

from threadboard.core.errors import ThreadboardError
from threadboard.core.settings import settings
from threadboard.db.session import SessionLocal, create_tables, transaction
from threadboard.models import User
from threadboard.models.vote import VoteDirection
from threadboard.repositories.user_repo import UserRepository
from threadboard.services import content, identity, social

logger = logging.getLogger("threadboard.seed")

DEMO_PASSWORD = "password123"
DEMO_USERS = (
    ("alice@example.com", "alice", "Alice"),
    ("bob@example.com", "bob", "Bob"),
    ("carol@example.com", "carol", "Carol"),
)


def ensure_owner(db: Session) -> User | None:
    """Create the owner account from settings unless it already exists."""
    if not settings.owner_email or not settings.owner_password:
        logger.info("OWNER_EMAIL/OWNER_PASSWORD not set; skipping owner bootstrap")
        return None
    existing = UserRepository(db).get_by_email(settings.owner_email)
    if existing is not None:
        logger.info("Owner %s already present", existing.username)
        return existing
    with transaction(db):
        owner = identity.create_account(
            db,
            email=settings.owner_email,
            username=settings.owner_username,
            password=settings.owner_password,
            is_admin=True,
            is_owner=True,
        )
    logger.info("Bootstrapped owner account %s", owner.username)
    return owner


def load_demo_content(db: Session) -> None:
    """Insert a few users, a followed author, a thread with a reply chain and votes."""
    users = UserRepository(db)
    accounts: list[User] = []
    for email, username, display_name in DEMO_USERS:
        user = users.get_by_email(email)
        if user is None:
            user = identity.signup(db, email, username, DEMO_PASSWORD, display_name)
        accounts.append(user)
    alice, bob, carol = accounts

    if users.get_follow(bob.id, alice.id) is None:
        social.follow(db, alice.id, bob.id)

    thread = content.create_thread(
        db, alice.id, "Welcome to Threadboard", "Say hello and tell us what you're working on."
    )
    first = content.add_comment(db, thread.id, bob.id, "Hello from Bob!")
    content.add_comment(db, thread.id, carol.id, "Hi Bob, welcome.", parent_id=first.id)
    content.vote_thread(db, thread.id, VoteDirection.UP, bob.id)
    content.vote_comment(db, thread.id, first.id, VoteDirection.UP, alice.id)
    logger.info("Demo content loaded (thread %s)", thread.id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Prepare the configured Threadboard database")
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Also insert demo users, a thread, comments and votes.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())
    create_tables()
    db = SessionLocal()
    try:
        ensure_owner(db)
        if args.demo:
            load_demo_content(db)
    except ThreadboardError as exc:
        logger.error("Seeding failed: %s: %s", exc.kind, exc.message)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
