# api/v1/deps.py
from __future__ import annotations

import logging
from typing import AsyncGenerator

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from services.auth import verify_token
from services.store import NutritionStore, SqlStore

_LOG = logging.getLogger(__name__)
_bearer = HTTPBearer(auto_error=False)


async def get_store(request: Request) -> AsyncGenerator[NutritionStore, None]:
    """
    One store per request: a fresh ``SqlStore`` session when a database is
    configured, otherwise the app-wide in-memory store.
    """
    database = getattr(request.app.state, "db", None)
    if database is None:
        yield request.app.state.store
        return
    async for session in database.session():
        yield SqlStore(session)


async def current_user_id(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> int:
    if creds is None or creds.scheme.lower() != "bearer":
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "No token provided")
    try:
        user_id, _ = verify_token(creds.credentials)
    except jwt.PyJWTError as exc:
        _LOG.debug("token rejected: %s", exc)
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid or expired token")
    return user_id
