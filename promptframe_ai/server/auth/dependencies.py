"""
FastAPI dependencies resolving the logged-in user from the session cookie.
"""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from sqlmodel.ext.asyncio.session import AsyncSession

from promptframe_ai.core.database import get_session
from promptframe_ai.core.database.entities.users import User
from promptframe_ai.core.database.repositories import AuthSessionRepository, UserRepository
from promptframe_ai.server.core.config import settings

from .sessions import session_key


async def get_optional_user(request: Request, session: AsyncSession = Depends(get_session)) -> Optional[User]:
    """Return the user of a valid session cookie, or None.

    Expired sessions and deactivated users count as logged out.
    """
    token = request.cookies.get(settings.auth.cookie_name)
    if not token:
        return None
    auth_session = await AuthSessionRepository(session).get_valid(session_key(token))
    if auth_session is None:
        return None
    user = await UserRepository(session).get_by_id(auth_session.user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
