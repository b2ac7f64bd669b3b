"""
User and login session repositories.

This module provides data access operations for user accounts and for the
server side login sessions referenced by the session cookie.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlmodel import func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.users import AuthSession, User
from .base import AsyncBaseRepository


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user account data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with async database session.

        Args:
            session: Async SQLModel Session for database operations
        """
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by login email.

        Args:
            email: Email address, compared exactly

        Returns:
            User instance or None
        """
        result = await self.session.exec(select(User).where(User.email == email))
        return result.first()

    async def update(self, user: User) -> User:
        user.updated_at = utc_now()
        return await super().update(user)

    async def update_last_login(self, user: User) -> User:
        user.last_login = utc_now()
        return await self.update(user)

    async def count(self) -> int:
        result = await self.session.exec(select(func.count()).select_from(User))
        return int(result.one())

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[User]:
        """List users with optional pagination and filtering.

        Args:
            limit: Maximum records to return
            offset: Records to skip
            filters: Field filters (role, is_active)

        Returns:
            List of User instances, newest first
        """
        return await self._list_ordered(User.created_at.desc(), limit, offset, filters)

    async def list_all(self) -> List[User]:
        return await self.list()


class AuthSessionRepository(AsyncBaseRepository[AuthSession]):
    """Repository for login sessions.

    Rows are keyed by a 64 hex character digest of the cookie token, never by
    the token itself. Expired sessions are treated as absent and removed when
    they are looked up.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AuthSession)

    async def create_for_user(self, user_id: str, session_key: str, max_age_seconds: int) -> AuthSession:
        """Open a new login session for a user.

        Args:
            user_id: Owner of the session
            session_key: Digest of the cookie token, used as the primary key
            max_age_seconds: Session lifetime

        Returns:
            Persisted AuthSession
        """
        auth_session = AuthSession(
            id=session_key,
            user_id=user_id,
            expires_at=utc_now() + timedelta(seconds=max_age_seconds),
        )
        return await self.create(auth_session)

    async def get_valid(self, session_key: str) -> Optional[AuthSession]:
        """Get a session by token if it has not expired.

        Args:
            session_key: Digest of the cookie token

        Returns:
            AuthSession instance or None when missing or expired
        """
        auth_session = await self.get_by_id(session_key)
        if auth_session is None:
            return None
        if auth_session.expires_at <= utc_now():
            await self.session.delete(auth_session)
            await self.session.commit()
            return None
        return auth_session

    async def delete_token(self, session_key: str) -> bool:
        return await self.delete(session_key)

    async def purge_expired(self) -> int:
        """Delete every expired session.

        Returns:
            Number of sessions removed
        """
        result = await self.session.exec(select(AuthSession).where(AuthSession.expires_at <= utc_now()))
        expired = list(result.all())
        for auth_session in expired:
            await self.session.delete(auth_session)
        await self.session.commit()
        return len(expired)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[AuthSession]:
        return await self._list_ordered(AuthSession.created_at.desc(), limit, offset, filters)
