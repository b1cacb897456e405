"""
Password hashing and JWT helpers for the admin panel
"""
from datetime import timedelta

import bcrypt
from jose import jwt

from portfolio.app.core.config import settings
from portfolio.app.utils.timeutil import utcnow


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed hash in DB
        return False


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Signed JWT carrying `data` plus an exp claim."""
    to_encode = data.copy()
    expire = utcnow() + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
