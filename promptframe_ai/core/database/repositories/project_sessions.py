"""
Project session repository.

This module provides data access operations for saved, working and
temporary project sessions.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.project_sessions import ProjectSession
from ..entities.users import User
from .base import AsyncBaseRepository


class ProjectSessionRepository(AsyncBaseRepository[ProjectSession]):
    """Repository for project session data access operations using SQLModel."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with async database session.

        Args:
            session: Async SQLModel Session for database operations
        """
        super().__init__(session, ProjectSession)

    async def update(self, project_session: ProjectSession) -> ProjectSession:
        project_session.updated_at = utc_now()
        return await super().update(project_session)

    async def update_fields(self, project_session: ProjectSession, changes: Dict[str, Any]) -> ProjectSession:
        """Apply a partial update. The owner is never changed.

        Args:
            project_session: Session to modify
            changes: Field values keyed by attribute name

        Returns:
            Updated ProjectSession, with ``updated_at`` bumped
        """
        for key, value in changes.items():
            if key in ("id", "user_id", "created_at", "updated_at"):
                continue
            setattr(project_session, key, value)
        return await self.update(project_session)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[ProjectSession]:
        return await self._list_ordered(ProjectSession.updated_at.desc(), limit, offset, filters)

    async def list_for_user(self, user: User) -> List[ProjectSession]:
        if user.is_admin:
            return await self.list()
        return await self.list(filters={"user_id": user.id})

    async def list_temporary_for_user(self, user_id: str) -> List[ProjectSession]:
        return await self.list(filters={"user_id": user_id, "is_temporary": True})

    async def clear_temporary_for_user(self, user_id: str) -> int:
        """Delete the user's temporary sessions.

        Args:
            user_id: Owner of the sessions

        Returns:
            Number of sessions deleted
        """
        temporary = await self.list_temporary_for_user(user_id)
        for project_session in temporary:
            await self.session.delete(project_session)
        await self.session.commit()
        return len(temporary)
