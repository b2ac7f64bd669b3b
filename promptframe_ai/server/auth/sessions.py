"""
Cookie backed login sessions.

The browser holds a random token in an HTTP-only cookie. The database only
stores an HMAC-SHA256 digest of that token keyed with ``SESSION_SECRET``, so
a leaked ``auth_sessions`` table cannot be replayed as cookies.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from functools import lru_cache

from fastapi import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import AuthSessionRepository
from promptframe_ai.core.logging_config import get_logger
from promptframe_ai.server.core.config import settings

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def _secret() -> bytes:
    secret = settings.auth.session_secret
    if not secret:
        logger.warning(
            "SESSION_SECRET is not set; using a per-process secret. "
            "Sessions will not survive a restart. Set SESSION_SECRET in production."
        )
        return secrets.token_bytes(32)
    return secret.encode("utf-8")


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def session_key(token: str) -> str:
    """Digest of a cookie token, used as the ``auth_sessions`` primary key."""
    return hmac.new(_secret(), token.encode("utf-8"), hashlib.sha256).hexdigest()


def set_session_cookie(response: Response, token: str) -> None:
    config = settings.auth
    response.set_cookie(
        key=config.cookie_name,
        value=token,
        max_age=config.max_age_seconds,
        httponly=True,
        secure=config.cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.auth.cookie_name, httponly=True, samesite="lax")


async def open_session(db: AsyncSession, user: User) -> str:
    """Create a login session for ``user``.

    Returns:
        The cookie token; only its digest is stored
    """
    token = new_session_token()
    await AuthSessionRepository(db).create_for_user(user.id, session_key(token), settings.auth.max_age_seconds)
    logger.info(f"Opened session for user {user.id}")
    return token


async def close_session(db: AsyncSession, token: str) -> bool:
    return await AuthSessionRepository(db).delete_token(session_key(token))
