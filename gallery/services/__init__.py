"""Service layer combining object storage and the images table."""

from .image_service import ImagePage, ImageService, storage_key_for

__all__ = ["ImagePage", "ImageService", "storage_key_for"]
