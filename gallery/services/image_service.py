"""Image upload, listing and deletion across S3 and the images table.

Create and delete each touch two stores without a shared transaction:

    create: put object -> insert row
    delete: look up row -> delete object -> delete row

Every step logs its own event so a partial failure is visible in the logs.
When the insert fails after the object was stored, a compensating object
delete runs (unless disabled); if that also fails the orphaned key is logged
as ``orphaned_object_left``. When the row delete fails after the object is
gone there is nothing to compensate with, and ``dangling_row_left`` is logged.

Clients only ever see the generic messages below.
"""

import math
import uuid
from dataclasses import dataclass

import structlog

from gallery.core.exceptions import BadRequestError, NotFoundError, UpstreamError
from gallery.core.storage import ObjectStorageClient, StorageError
from gallery.models.image import Image
from gallery.repository.image_repository import ImageRepository

__all__ = [
    "DELETE_FAILED",
    "FETCH_FAILED",
    "ID_REQUIRED",
    "IMAGE_NOT_FOUND",
    "NO_FILE",
    "UPLOAD_FAILED",
    "ImagePage",
    "ImageService",
    "storage_key_for",
]

logger = structlog.get_logger(__name__)

NO_FILE = "No file provided"
ID_REQUIRED = "Image ID is required"
IMAGE_NOT_FOUND = "Image not found"
UPLOAD_FAILED = "File upload failed"
FETCH_FAILED = "Failed to fetch images"
DELETE_FAILED = "Failed to delete image"

_FALLBACK_EXTENSION = "bin"


def storage_key_for(filename: str) -> str:
    """Storage key ``<uuid4>.<extension>`` for an uploaded file name."""
    _, dot, extension = filename.rpartition(".")
    if not dot or not extension:
        extension = _FALLBACK_EXTENSION
    return f"{uuid.uuid4()}.{extension}"


@dataclass
class ImagePage:
    """One page of images plus the numbers needed to render a pager."""

    images: list[Image]
    total: int
    page: int | None = None
    page_size: int | None = None

    @property
    def total_pages(self) -> int:
        if not self.page_size:
            return 1 if self.total else 0
        return math.ceil(self.total / self.page_size)


class ImageService:
    """Coordinates ObjectStorageClient and ImageRepository for one request."""

    def __init__(
        self,
        repository: ImageRepository,
        storage: ObjectStorageClient,
        compensate: bool = True,
    ) -> None:
        self.repository = repository
        self.storage = storage
        self.compensate = compensate

    async def create(
        self,
        filename: str,
        content_type: str,
        payload: bytes,
        description: str | None = None,
    ) -> Image:
        """Store ``payload`` in the bucket, then record it in the images table.

        Raises:
            BadRequestError: If no file name was given.
            UpstreamError: If the upload or the insert failed.
        """
        if not filename:
            raise BadRequestError(NO_FILE)

        key = storage_key_for(filename)
        url = self.storage.url_for(key)
        size = len(payload)
        log = logger.bind(key=key, size=size)

        try:
            await self.storage.put(key, payload, content_type, size)
        except StorageError as exc:
            log.error("image_upload_failed", error=str(exc))
            raise UpstreamError(UPLOAD_FAILED, stage="storage") from exc

        try:
            image = await self.repository.create(
                id=uuid.uuid4(),
                name=key,
                url=url,
                description=description or "",
                size=size,
            )
            await self.repository.commit()
        except Exception as exc:
            log.error("image_insert_failed", error=str(exc))
            await self._discard_orphan(key)
            raise UpstreamError(UPLOAD_FAILED, stage="database") from exc

        log.info("image_uploaded", id=str(image.id))
        return image

    async def _discard_orphan(self, key: str) -> None:
        if not self.compensate:
            logger.warning("orphaned_object_left", key=key, compensated=False)
            return
        try:
            await self.storage.delete(key)
        except StorageError as exc:
            logger.error("orphaned_object_left", key=key, compensated=False, error=str(exc))
        else:
            logger.info("orphaned_object_removed", key=key)

    async def list_images(
        self, page: int | None = None, page_size: int | None = None
    ) -> ImagePage:
        """All images newest first, or one page of them when ``page`` is given.

        Raises:
            UpstreamError: If the query failed.
        """
        try:
            if page is None:
                images = await self.repository.list_newest_first()
                return ImagePage(images=images, total=len(images))

            page_size = page_size or 12
            images = await self.repository.list_newest_first(
                limit=page_size, offset=(page - 1) * page_size
            )
            total = await self.repository.count()
        except Exception as exc:
            logger.error("image_list_failed", error=str(exc))
            raise UpstreamError(FETCH_FAILED, stage="database") from exc

        return ImagePage(images=images, total=total, page=page, page_size=page_size)

    async def delete(self, image_id: str | None) -> str:
        """Delete the object and then the row for ``image_id``.

        Returns:
            The storage key of the deleted image.

        Raises:
            BadRequestError: If no id was given.
            NotFoundError: If no row has that id.
            UpstreamError: If the lookup, the object delete or the row delete failed.
        """
        if not image_id:
            raise BadRequestError(ID_REQUIRED)

        try:
            parsed_id = uuid.UUID(image_id)
        except ValueError:
            # Not a UUID, so no row can match
            raise NotFoundError(IMAGE_NOT_FOUND, detail={"id": image_id}) from None

        try:
            image = await self.repository.get_by_id(parsed_id)
        except Exception as exc:
            logger.error("image_lookup_failed", id=image_id, error=str(exc))
            raise UpstreamError(DELETE_FAILED, stage="database") from exc

        if image is None:
            raise NotFoundError(IMAGE_NOT_FOUND, detail={"id": image_id})

        key = image.name
        log = logger.bind(id=image_id, key=key)

        try:
            await self.storage.delete(key)
        except StorageError as exc:
            # Nothing changed yet: object and row are both still in place
            log.error("image_object_delete_failed", error=str(exc))
            raise UpstreamError(DELETE_FAILED, stage="storage") from exc

        try:
            await self.repository.delete(parsed_id)
            await self.repository.commit()
        except Exception as exc:
            log.error("dangling_row_left", error=str(exc))
            raise UpstreamError(DELETE_FAILED, stage="database") from exc

        log.info("image_deleted")
        return key
