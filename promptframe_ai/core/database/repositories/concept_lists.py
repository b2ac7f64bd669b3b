"""
Concept list repository.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from ..base import utc_now
from ..entities.concept_lists import ConceptList
from ..entities.users import User
from .base import AsyncBaseRepository


class ConceptListRepository(AsyncBaseRepository[ConceptList]):
    """Repository for concept lists.

    JSON columns are always reassigned with new objects, never mutated in
    place, so changes are picked up by the unit of work.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ConceptList)

    async def update(self, concept_list: ConceptList) -> ConceptList:
        concept_list.updated_at = utc_now()
        return await super().update(concept_list)

    async def update_fields(self, concept_list: ConceptList, changes: Dict[str, Any]) -> ConceptList:
        for key, value in changes.items():
            if key in ("id", "user_id", "created_at", "updated_at"):
                continue
            setattr(concept_list, key, value)
        return await self.update(concept_list)

    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[ConceptList]:
        return await self._list_ordered(ConceptList.created_at.desc(), limit, offset, filters)

    async def list_for_user(self, user: User) -> List[ConceptList]:
        """List concept lists visible to a user.

        Args:
            user: Requesting user

        Returns:
            Every list for admins, otherwise the user's own lists
        """
        if user.is_admin:
            return await self.list()
        return await self.list(filters={"user_id": user.id})
