# app/utils/security.py
"""
Password hashing and session tokens.

Passwords are stored as salted bcrypt hashes. Sessions are stateless: a
signed JWT carrying the user id travels in an HttpOnly cookie, and nothing
is kept server side, so logout can only clear the cookie.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Response
from jose import JWTError, jwt

from app.config.settings import settings


class TokenError(Exception):
    """Raised when a session token cannot be verified"""


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    pw_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], hashed_password.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> int:
    """Return the user id a token was issued for.

    Raises TokenError for expired, tampered or malformed tokens.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise TokenError(str(e))

    subject = payload.get("sub")
    if subject is None:
        raise TokenError("Token has no subject")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise TokenError("Token subject is not a user id")


def set_session_cookie(response: Response, user_id: int) -> str:
    """Issue a session token for the user and attach it to the response"""
    token = create_access_token(user_id)
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.cookie_max_age_seconds,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
    return token


def clear_session_cookie(response: Response):
    """Overwrite the session cookie with an empty, already expired value"""
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value="",
        max_age=0,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )
