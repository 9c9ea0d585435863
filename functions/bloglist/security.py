"""
Password hashing and access tokens.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from bloglist.config import get_settings


class TokenError(Exception):
    """Raised when an access token cannot be trusted."""

    def __init__(self, message: str, *, expired: bool = False):
        super().__init__(message)
        self.expired = expired


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash password using bcrypt"""
    rounds = rounds or get_settings().bcrypt_rounds
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def create_access_token(username: str, user_id: str) -> str:
    settings = get_settings()
    claims: dict = {"username": username, "id": user_id}
    if settings.token_ttl_seconds:
        claims["exp"] = datetime.now(timezone.utc) + timedelta(
            seconds=settings.token_ttl_seconds
        )
    return jwt.encode(claims, settings.secret, algorithm=settings.token_algorithm)


def decode_access_token(token: str) -> dict:
    """
    Verify a token and return its claims.

    Raises TokenError when the signature is bad, the token has expired or
    the claims lack a user id.
    """
    settings = get_settings()
    try:
        claims = jwt.decode(
            token, settings.secret, algorithms=[settings.token_algorithm]
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("token expired", expired=True) from exc
    except jwt.PyJWTError as exc:
        raise TokenError("token invalid") from exc
    if not claims.get("id"):
        raise TokenError("token invalid")
    return claims
