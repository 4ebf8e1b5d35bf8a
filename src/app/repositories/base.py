"""Base repository with generic CRUD operations."""
from typing import Any, Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Generic repository providing CRUD operations for any model."""

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: UUID) -> T | None:
        """Get a single record by ID."""
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, obj: T) -> T:
        """Create a new record."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def update(self, id: UUID, data: dict[str, Any], commit: bool = True) -> T | None:
        """Update a record by ID with provided data.

        With ``commit=False`` the change is only flushed; the caller owns the
        transaction.
        """
        obj = await self.get_by_id(id)
        if not obj:
            return None

        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        if commit:
            await self.db.commit()
        else:
            await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, id: UUID) -> T | None:
        """Delete a record by ID, returning the removed row."""
        obj = await self.get_by_id(id)
        if not obj:
            return None

        await self.db.delete(obj)
        await self.db.commit()
        return obj
