"""Shared persistence helpers for the model repositories."""
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from moneytree.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Persistence for one model type over a request-scoped session.

    ``add`` only stages a row so several writes can share one commit; the
    other writes commit immediately.
    """

    model: ClassVar[type[BaseModel]]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, id: UUID) -> T | None:
        """Fetch a row by primary key regardless of owner."""
        return await self.db.scalar(select(self.model).filter_by(id=id))

    async def add(self, obj: T) -> T:
        """Stage ``obj`` and flush so generated columns are populated."""
        self.db.add(obj)
        await self.db.flush()
        return obj

    async def save(self, obj: T) -> T:
        """Commit ``obj`` (new or already loaded) and reload it."""
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    async def apply(self, obj: T, changes: dict[str, Any]) -> T:
        """Copy ``changes`` onto a loaded row and commit."""
        for field, value in changes.items():
            setattr(obj, field, value)
        return await self.save(obj)

    async def remove(self, obj: T) -> None:
        await self.db.delete(obj)
        await self.db.commit()
