"""Image repository for database operations."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.base_repository import BaseRepository
from gallery.models.image import Image


class ImageRepository(BaseRepository[Image, uuid.UUID]):
    """Repository for Image entity operations.

    Provides database access methods specific to Image entities.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize ImageRepository with database session.

        Args:
            session: Async SQLAlchemy session
        """
        super().__init__(Image, session)

    async def list_newest_first(
        self, limit: int | None = None, offset: int | None = None
    ) -> list[Image]:
        """List images ordered by upload time, newest first.

        Args:
            limit: Maximum number of results to return
            offset: Number of records to skip

        Returns:
            List of Image instances
        """
        query = select(self.model).order_by(self.model.last_modified.desc(), self.model.id)

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_by_name(self, name: str) -> Image | None:
        """Find image by storage key.

        Args:
            name: Storage key of the object

        Returns:
            Image instance or None if not found
        """
        result = await self.session.execute(select(self.model).where(self.model.name == name))
        return result.scalar_one_or_none()
