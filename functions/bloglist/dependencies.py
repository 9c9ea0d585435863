"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bloglist.config import get_settings
from bloglist.db import DbClient, InMemoryDbClient, SqlDbClient, UserRecord
from bloglist.security import TokenError, decode_access_token

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None

bearer_scheme = HTTPBearer(auto_error=False)


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so users and blogs persist across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = SqlDbClient(settings.database_url)
    return _db_client


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: DbClient = Depends(get_db_client),
) -> UserRecord:
    """
    Resolve the user behind the request's bearer token.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="token missing")
    try:
        claims = decode_access_token(credentials.credentials)
    except TokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user = db.get_user(claims["id"])
    if not user:
        raise HTTPException(status_code=401, detail="user not found")
    return user
