"""
Base repository with common CRUD operations.

Uses SQLAlchemy async session for non-blocking database access.

Usage:
    class StoredResultRepository(BaseRepository[StoredResult]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, StoredResult)

        async def clear_all(self) -> int:
            return await self.delete_all()
"""

from typing import Any, TypeVar, Generic, Type
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database operations.

    All methods are async and only flush; committing is left to the caller
    that owns the session.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def _filtered(self, query, filters: dict[str, Any]):
        for key, value in filters.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    async def get_by_id(self, id: int) -> T | None:
        """Get entity by primary key, or None."""
        return await self.db.get(self.model, id)

    async def create(self, **kwargs) -> T:
        """Create new entity and return it with its generated ID."""
        entity = self.model(**kwargs)
        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def update(self, entity: T, **kwargs) -> T:
        """Set the given fields on entity."""
        for key, value in kwargs.items():
            setattr(entity, key, value)
        await self.db.flush()
        await self.db.refresh(entity)
        return entity

    async def delete(self, entity: T) -> None:
        await self.db.delete(entity)
        await self.db.flush()

    async def delete_all(self) -> int:
        """Delete every row of the model's table. Returns deleted count."""
        result = await self.db.execute(delete(self.model))
        await self.db.flush()
        return result.rowcount or 0

    async def count(self, **kwargs) -> int:
        """Count entities matching criteria."""
        query = self._filtered(select(func.count()).select_from(self.model), kwargs)
        result = await self.db.execute(query)
        return result.scalar() or 0
