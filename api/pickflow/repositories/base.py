"""
Base Repository

Generic async data-access helpers shared by every repository.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pickflow.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Repository bound to one ORM model and one session.

    Subclasses set ``model``. Methods flush but never commit; the caller
    owns the transaction.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: int) -> ModelT | None:
        """Get a row by primary key."""
        return await self.session.get(self.model, id)

    async def get(self, **filters: Any) -> ModelT | None:
        """Get the first row matching equality filters."""
        query = select(self.model).filter_by(**filters).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def create(self, entity: ModelT) -> ModelT:
        """Add a new row and load server-generated columns."""
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        """Delete a row."""
        await self.session.delete(entity)
        await self.session.flush()
