# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

import pytest
from fastapi import HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from threadboard.api.v1.dependencies import get_current_user
from threadboard.core.security import create_access_token
from threadboard.core.settings import settings


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    """Test the get_current_user dependency function."""

    def test_get_current_user_success(self, db_session, test_user):
        """A valid token resolves to the stored user."""
        token = create_access_token(test_user.id)

        result = get_current_user(_credentials(token), db_session)

        assert result.id == test_user.id

    def test_missing_credentials(self, db_session):
        """No Authorization header is reported as 401, not 403."""
        with pytest.raises(HTTPException) as exc_info:
            get_current_user(None, db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_get_current_user_invalid_jwt(self, db_session):
        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_credentials("invalid_token"), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Could not validate credentials" in exc_info.value.detail

    def test_get_current_user_missing_subject(self, db_session):
        """A token without a subject claim is rejected."""
        token = jwt.encode(
            {"type": "access"}, settings.secret_key, algorithm=settings.jwt_algorithm
        )

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_credentials(token), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Could not validate credentials" in exc_info.value.detail

    def test_get_current_user_nonexistent_user(self, db_session):
        """A valid token for a deleted or unknown account is rejected."""
        token = create_access_token("0" * 32)

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_credentials(token), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert "User not found" in exc_info.value.detail

    def test_get_current_user_wrong_algorithm(self, db_session, test_user):
        """Tokens signed with an algorithm other than the configured one fail."""
        token = jwt.encode(
            {"sub": test_user.id, "type": "access"},
            settings.secret_key,
            algorithm="HS512",
        )

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_credentials(token), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_current_user_expired_token(self, db_session, test_user):
        token = jwt.encode(
            {"sub": test_user.id, "type": "access", "exp": 1234567890},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_credentials(token), db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Could not validate credentials" in exc_info.value.detail
