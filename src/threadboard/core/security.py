"""Password hashing and access-token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from functools import lru_cache

import bcrypt
from jose import JWTError, jwt

from threadboard.core.settings import settings


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check ``plain`` against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage.
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("threadboard-dummy-password")


def burn_password_check(plain: str) -> None:
    """Spend the same time as a real check when no account matched."""
    verify_password(plain, _dummy_hash())


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT whose subject is the user identifier.

    Args:
        user_id: Identifier of the authenticated user.
        expires_delta: Optional lifetime override.

    Returns:
        Encoded JWT string.
    """
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": user_id, "type": "access", "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Return the subject of a valid access token.

    Raises:
        JWTError: If the token is malformed, expired or lacks a subject.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if not subject or payload.get("type") != "access":
        raise JWTError("Token has no access subject")
    return str(subject)
