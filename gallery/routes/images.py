"""Image routes: upload, list and delete."""

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import AliasChoices, BaseModel, Field

from gallery.core.dependencies import get_gallery_settings, get_image_service
from gallery.core.exceptions import BadRequestError, PayloadTooLargeError
from gallery.main_config import GalleryConfig
from gallery.services.image_service import NO_FILE, ImageService

router = APIRouter(
    prefix="/api/images",
    tags=["images"],
)

# Keeps offset = page * pageSize inside a 32-bit integer
MAX_PAGE = 10_000


# Pydantic models for request/response
class ImageCreatedResponse(BaseModel):
    """Schema for a successful upload."""

    status: str = "success"
    id: uuid.UUID
    name: str
    url: str
    description: str


class ImageResponse(BaseModel):
    """Schema for one image in a listing."""

    id: uuid.UUID
    name: str
    url: str
    description: str | None = None
    size: int | None = None
    last_modified: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("last_modified", "lastModified"),
        serialization_alias="lastModified",
    )

    model_config = {"from_attributes": True}


class ImageListResponse(BaseModel):
    """Schema for the full, unpaginated listing."""

    status: str = "success"
    data: list[ImageResponse]
    results: int


class PaginatedImageListResponse(ImageListResponse):
    """Listing of one page, with the numbers needed to render a pager."""

    page: int
    page_size: int = Field(serialization_alias="pageSize")
    total: int
    total_pages: int = Field(serialization_alias="totalPages")


class ImageDeletedResponse(BaseModel):
    status: str = "success"
    message: str


@router.post("", response_model=ImageCreatedResponse)
async def create_image(
    image: UploadFile | None = File(None, description="Image payload"),
    description: str | None = Form(None, description="Optional free-text description"),
    service: ImageService = Depends(get_image_service),
    gallery_config: GalleryConfig = Depends(get_gallery_settings),
):
    """Upload an image to the bucket and record it."""
    if image is None or not image.filename:
        raise BadRequestError(NO_FILE)

    payload = await image.read()
    limit = gallery_config.max_upload_bytes
    if limit is not None and len(payload) > limit:
        raise PayloadTooLargeError(
            f"File exceeds the {limit} byte upload limit", detail={"size": len(payload)}
        )

    created = await service.create(
        filename=image.filename,
        content_type=image.content_type or "application/octet-stream",
        payload=payload,
        description=description,
    )
    return ImageCreatedResponse(
        id=created.id,
        name=created.name,
        url=created.url,
        description=created.description or "",
    )


# Serialized with jsonable_encoder so the camelCase aliases of whichever
# listing model is returned are kept as-is.
@router.get("", response_model=None, responses={200: {"model": ImageListResponse}})
async def list_images(
    page: int | None = Query(None, ge=1, le=MAX_PAGE, description="Page number, enables paging"),
    page_size: int | None = Query(None, alias="pageSize", ge=1, le=100),
    service: ImageService = Depends(get_image_service),
    gallery_config: GalleryConfig = Depends(get_gallery_settings),
):
    """List images newest first. Without `page` or `pageSize` every image is returned."""
    if page is None and page_size is None:
        result = await service.list_images()
        data = [ImageResponse.model_validate(image) for image in result.images]
        return ImageListResponse(data=data, results=len(data))

    result = await service.list_images(
        page=page or 1, page_size=page_size or gallery_config.default_page_size
    )
    data = [ImageResponse.model_validate(image) for image in result.images]
    return PaginatedImageListResponse(
        data=data,
        results=len(data),
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.delete("", response_model=ImageDeletedResponse)
async def delete_image(
    id: str | None = Query(None, description="Id of the image to delete"),
    service: ImageService = Depends(get_image_service),
):
    """Delete an image from the bucket and the table."""
    key = await service.delete(id)
    return ImageDeletedResponse(message=f"Image {key} deleted")
