# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "threadboard-test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from threadboard.core.security import create_access_token
from threadboard.db.session import Base, transaction
from threadboard.db.session import get_db as app_get_session
from threadboard.main import app as fastapi_app
from threadboard.models import Comment, Thread, User
from threadboard.services import identity

TEST_DB_URL = "sqlite://"
DEFAULT_PASSWORD = "correct-horse"

_USER_COUNTER = count(1)
_BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits only release savepoints inside an outer transaction."""
    connection = engine.connect()
    outer = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if outer.is_active:
            outer.rollback()
        connection.close()

        # Ensure each test sees a clean database even if something escaped the rollback.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists accounts with the default password."""

    def _make_user(
        username: str | None = None,
        *,
        display_name: str | None = None,
        is_admin: bool = False,
        is_owner: bool = False,
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        username = username or f"user{next(_USER_COUNTER)}"
        with transaction(db_session):
            user = identity.create_account(
                db_session,
                email=f"{username}@example.com",
                username=username,
                password=password,
                display_name=display_name,
                is_admin=is_admin or is_owner,
                is_owner=is_owner,
            )
        return user

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("alice", display_name="Alice")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second regular user."""
    return make_user("bob", display_name="Bob")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    return make_user("moderator", display_name="Moderator", is_admin=True)


@pytest.fixture()
def owner_user(make_user: Callable[..., User]) -> User:
    return make_user("founder", display_name="Founder", is_owner=True)


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for any user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture()
def auth_token(test_user: User, headers_for: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return headers_for(test_user)


@pytest.fixture()
def other_auth_token(
    other_user: User, headers_for: Callable[[User], dict[str, str]]
) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return headers_for(other_user)


@pytest.fixture()
def test_thread(db_session: Session, test_user: User) -> Thread:
    """A thread written by the primary test user."""
    from threadboard.services import content

    return content.create_thread(db_session, test_user.id, "Hello world", "First post body")


@pytest.fixture()
def set_created_at(db_session: Session) -> Callable[[Thread | Comment, int], None]:
    """Pin ``created_at`` to a fixed offset so ordering assertions are deterministic."""

    def _set(row: Thread | Comment, minutes: int) -> None:
        with transaction(db_session):
            row.created_at = _BASE_TIME + timedelta(minutes=minutes)

    return _set
