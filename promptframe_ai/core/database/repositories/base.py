"""
Shared repository plumbing.

Every table repository wraps one ``AsyncSession`` and one SQLModel entity
class. The API handlers and the background generation runner both go through
these classes, so commits always happen in the repository, never in callers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

EntityType = TypeVar("EntityType", bound=SQLModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """CRUD operations shared by the table repositories.

    Args:
        session: Session the repository reads and commits through
        model: Entity class stored in the table
    """

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        self.session = session
        self.model = model

    async def _save(self, entity: EntityType) -> EntityType:
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def create(self, entity: EntityType) -> EntityType:
        """Insert a row and return it with defaults and timestamps filled in."""
        return await self._save(entity)

    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        return await self.session.get(self.model, entity_id)

    async def update(self, entity: EntityType) -> EntityType:
        """Commit changes made to an entity loaded through this session."""
        return await self._save(entity)

    async def delete(self, entity_id: str) -> bool:
        """Remove a row.

        Returns:
            ``False`` when no row has this ID
        """
        entity = await self.get_by_id(entity_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.commit()
        return True

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """Rows in the table's natural order.

        Args:
            limit: Page size
            offset: Rows to skip
            filters: Column equality filters; ``None`` values are ignored
        """

    async def _list_ordered(
        self,
        order_by: Any,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[EntityType]:
        stmt = select(self.model).order_by(order_by)
        if filters:
            stmt = QueryBuilder.apply_filters(stmt, self.model, filters)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.exec(stmt)
        return list(result.all())


class QueryBuilder:
    """Helpers that narrow a ``select`` statement."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Add ``column == value`` clauses.

        Keys that are not columns of ``model`` and ``None`` values are skipped.
        """
        for column, value in filters.items():
            if value is None or not hasattr(model, column):
                continue
            stmt = stmt.where(getattr(model, column) == value)
        return stmt

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        if offset is not None:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return stmt
