"""
FastAPI dependency injection functions for database sessions and services.

All dependencies read the AppContext built by the lifespan, so tests can
either put their own context on ``app.state.context`` or override these
functions with ``app.dependency_overrides``.

Usage in FastAPI Routes:
    from fastapi import Depends
    from gallery.core.dependencies import get_image_service

    @router.get("")
    async def list_images(service: ImageService = Depends(get_image_service)):
        page = await service.list_images()
"""

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from gallery.core.context import AppContext
from gallery.main_config import GalleryConfig
from gallery.repository.image_repository import ImageRepository
from gallery.services.image_service import ImageService


def get_context(request: Request) -> AppContext:
    """The application context stored by the lifespan."""
    return request.app.state.context


async def get_db(context: AppContext = Depends(get_context)) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency for async database session.

    Provides a database session that automatically handles cleanup
    and rollback on errors.
    """
    async with context.db.get_session() as session:
        yield session


def get_gallery_settings(context: AppContext = Depends(get_context)) -> GalleryConfig:
    return context.gallery_config


def get_image_service(
    context: AppContext = Depends(get_context),
    session: AsyncSession = Depends(get_db),
) -> ImageService:
    return ImageService(
        ImageRepository(session),
        context.storage,
        compensate=context.gallery_config.compensate_partial_failures,
    )
