"""Tests for password hashing and access tokens."""

from datetime import timedelta

import pytest
from jose import JWTError, jwt

from threadboard.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from threadboard.core.settings import settings


def test_hash_and_verify():
    hashed = hash_password("hunter22")
    assert hashed.startswith("$2")
    assert verify_password("hunter22", hashed)
    assert not verify_password("hunter23", hashed)


def test_verify_against_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_round_trip():
    token = create_access_token("user-123")
    assert decode_access_token(token) == "user-123"


def test_expired_token_rejected():
    token = create_access_token("user-123", expires_delta=timedelta(seconds=-1))
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_signed_with_other_key_rejected():
    token = jwt.encode({"sub": "user-123", "type": "access"}, "other-key", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_without_access_type_rejected():
    token = jwt.encode({"sub": "user-123"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(JWTError):
        decode_access_token(token)
