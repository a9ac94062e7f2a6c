"""
Generic repository base class for SQLAlchemy models with async CRUD operations.

Features:
    - Type-safe operations: BaseRepository[ModelType, IDType]
    - Create, read and delete (images are never updated in place)
    - Counting
    - Automatic rollback on database errors

Usage:
    class ImageRepository(BaseRepository[Image, uuid.UUID]):
        async def find_by_name(self, name: str) -> Image | None:
            result = await self.session.execute(
                select(Image).where(Image.name == name)
            )
            return result.scalar_one_or_none()

    async with pool.get_session() as session:
        repo = ImageRepository(session)
        image = await repo.create(id=uuid.uuid4(), name="a.jpg", url="...")
        await repo.commit()
"""

import uuid
from abc import ABC
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

__all__ = ["BaseRepository"]

# Type variables for SQLAlchemy model and ID type
ModelType = TypeVar("ModelType")
IDType = TypeVar("IDType", int, str, uuid.UUID)


class BaseRepository(Generic[ModelType, IDType], ABC):
    """Base repository with async CRUD operations for SQLAlchemy models."""

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    async def create(self, **kwargs: Any) -> ModelType:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created instance
        """
        try:
            instance = self.model(**kwargs)
            self.session.add(instance)
            await self.session.flush()
            await self.session.refresh(instance)
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        else:
            return instance

    async def get_by_id(self, id: IDType) -> ModelType | None:
        """Get record by ID.

        Args:
            id: Primary key

        Returns:
            Instance or None
        """
        result = await self.session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def delete(self, id: IDType) -> bool:
        """Delete record by ID.

        Args:
            id: Primary key

        Returns:
            True if deleted
        """
        try:
            result = await self.session.execute(delete(self.model).where(self.model.id == id))
            await self.session.flush()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        else:
            return result.rowcount > 0

    async def count(self, **filters: Any) -> int:
        """Count records.

        Args:
            **filters: Optional filters

        Returns:
            Total count
        """
        query = select(func.count()).select_from(self.model)

        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def commit(self) -> None:
        """Commit current transaction."""
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
