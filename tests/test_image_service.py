"""Tests for the two-phase create/delete flow in ImageService."""

import uuid

import pytest
from sqlalchemy.exc import SQLAlchemyError

from gallery.core.exceptions import BadRequestError, NotFoundError, UpstreamError
from gallery.services.image_service import ImageService, storage_key_for

pytestmark = pytest.mark.anyio


@pytest.fixture
def service(repository, storage) -> ImageService:
    return ImageService(repository, storage)


# =============================================================================
# Storage keys
# =============================================================================


@pytest.mark.parametrize(
    ("filename", "extension"),
    [
        ("cat.jpg", "jpg"),
        ("holiday.photo.PNG", "PNG"),
        ("archive.tar.gz", "gz"),
        ("no_extension", "bin"),
        (".jpg", "jpg"),
        ("trailing.", "bin"),
    ],
)
def test_storage_key_keeps_original_extension(filename, extension) -> None:
    key = storage_key_for(filename)

    stem, _, ext = key.partition(".")
    assert ext == extension
    uuid.UUID(stem)


# =============================================================================
# Create
# =============================================================================


async def test_create_uploads_then_inserts(service, repository, storage) -> None:
    image = await service.create("cat.jpg", "image/jpeg", b"a" * 1024, "my cat")

    assert image.size == 1024
    assert image.description == "my cat"
    assert image.url == storage.url_for(image.name)
    assert image.name in storage.objects
    assert await repository.find_by_name(image.name) is not None


async def test_create_requires_filename(service, storage) -> None:
    with pytest.raises(BadRequestError) as exc_info:
        await service.create("", "image/jpeg", b"abc")

    assert exc_info.value.message == "No file provided"
    assert storage.objects == {}


async def test_create_storage_failure(service, repository, storage) -> None:
    storage.fail_put = True

    with pytest.raises(UpstreamError) as exc_info:
        await service.create("cat.jpg", "image/jpeg", b"abc")

    assert exc_info.value.stage == "storage"
    assert exc_info.value.message == "File upload failed"
    assert await repository.count() == 0


async def test_insert_failure_compensates(service, repository, storage, monkeypatch) -> None:
    async def failing_create(**kwargs):
        raise SQLAlchemyError("duplicate key")

    monkeypatch.setattr(repository, "create", failing_create)

    with pytest.raises(UpstreamError) as exc_info:
        await service.create("cat.jpg", "image/jpeg", b"abc")

    assert exc_info.value.stage == "database"
    assert storage.objects == {}
    assert len(storage.deleted) == 1


async def test_insert_failure_without_compensation_leaves_orphan(
    repository, storage, monkeypatch
) -> None:
    service = ImageService(repository, storage, compensate=False)

    async def failing_create(**kwargs):
        raise SQLAlchemyError("duplicate key")

    monkeypatch.setattr(repository, "create", failing_create)

    with pytest.raises(UpstreamError):
        await service.create("cat.jpg", "image/jpeg", b"abc")

    assert len(storage.objects) == 1
    assert storage.deleted == []


async def test_failed_compensation_still_reports_upload_failure(
    service, repository, storage, monkeypatch
) -> None:
    async def failing_create(**kwargs):
        raise SQLAlchemyError("duplicate key")

    monkeypatch.setattr(repository, "create", failing_create)
    storage.fail_delete = True

    with pytest.raises(UpstreamError) as exc_info:
        await service.create("cat.jpg", "image/jpeg", b"abc")

    assert exc_info.value.stage == "database"
    assert len(storage.objects) == 1


# =============================================================================
# List
# =============================================================================


async def test_list_all(service) -> None:
    for name in ("a.png", "b.png", "c.png"):
        await service.create(name, "image/png", b"x")

    page = await service.list_images()

    assert page.total == 3
    assert len(page.images) == 3
    assert page.page is None


async def test_list_page_beyond_end_is_empty(service) -> None:
    await service.create("a.png", "image/png", b"x")

    page = await service.list_images(page=3, page_size=12)

    assert page.images == []
    assert page.total == 1
    assert page.total_pages == 1


# =============================================================================
# Delete
# =============================================================================


async def test_delete_removes_object_and_row(service, repository, storage) -> None:
    image = await service.create("cat.jpg", "image/jpeg", b"abc")

    key = await service.delete(str(image.id))

    assert key == image.name
    assert storage.objects == {}
    assert await repository.count() == 0


@pytest.mark.parametrize("image_id", [None, ""])
async def test_delete_requires_id(service, image_id) -> None:
    with pytest.raises(BadRequestError) as exc_info:
        await service.delete(image_id)

    assert exc_info.value.message == "Image ID is required"


async def test_delete_unknown_id(service, storage) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await service.delete(str(uuid.uuid4()))

    assert exc_info.value.message == "Image not found"
    assert storage.deleted == []


async def test_delete_row_failure_leaves_dangling_row(
    service, repository, storage, monkeypatch
) -> None:
    image = await service.create("cat.jpg", "image/jpeg", b"abc")

    async def failing_delete(id):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr(repository, "delete", failing_delete)

    with pytest.raises(UpstreamError) as exc_info:
        await service.delete(str(image.id))

    assert exc_info.value.stage == "database"
    assert exc_info.value.message == "Failed to delete image"
    assert image.name not in storage.objects
    assert await repository.get_by_id(image.id) is not None
