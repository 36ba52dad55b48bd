# app/utils/auth.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.database import get_db
from app.models.user import User
from app.utils.permissions import AccessPolicy
from app.utils.security import TokenError, decode_access_token

logger = logging.getLogger(__name__)

session_cookie = APIKeyCookie(name=settings.COOKIE_NAME, auto_error=False)


def get_current_user(
    token: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the session cookie to a stored user, 401 otherwise"""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No token provided",
        )

    try:
        user_id = decode_access_token(token)
    except TokenError as e:
        logger.info(f"Rejected session token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - Invalid token",
        )

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - User not found",
        )
    return user


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """Role gate for admin-only routes"""
    if not AccessPolicy.is_admin(current_user):
        logger.warning(f"Non-admin user {current_user.id} tried to reach an admin route")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden - Admin access required",
        )
    return current_user
