"""Password hashing and session token tests."""

from datetime import timedelta

import pytest
from jose import jwt

from app.config.settings import settings
from app.utils.security import (
    TokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_is_salted():
    first = hash_password("secret123")
    second = hash_password("secret123")
    assert first != second
    assert verify_password("secret123", first)
    assert verify_password("secret123", second)


def test_verify_wrong_password():
    assert not verify_password("nope", hash_password("secret123"))


def test_verify_garbage_hash():
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_token_round_trip():
    assert decode_access_token(create_access_token(42)) == 42


def test_token_expires_after_fifteen_days():
    payload = jwt.decode(create_access_token(1), settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert payload["exp"] - payload["iat"] == 15 * 24 * 60 * 60


def test_expired_token_rejected():
    with pytest.raises(TokenError):
        decode_access_token(create_access_token(1, timedelta(seconds=-1)))


def test_token_signed_with_other_key_rejected():
    forged = jwt.encode({"sub": "1"}, "another-key", algorithm=settings.ALGORITHM)
    with pytest.raises(TokenError):
        decode_access_token(forged)


def test_token_without_subject_rejected():
    token = jwt.encode({"foo": "bar"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(TokenError):
        decode_access_token(token)
