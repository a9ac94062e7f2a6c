"""Tests for ImageRepository on an in-memory sqlite database."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from gallery.core.database import AsyncDBPool
from gallery.main_config import DatabaseConfig

pytestmark = pytest.mark.anyio

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


async def add_image(repository, minutes: int, name: str | None = None):
    image_id = uuid.uuid4()
    key = name or f"{image_id}.jpg"
    return await repository.create(
        id=image_id,
        name=key,
        url=f"https://bucket.s3.us-east-1.amazonaws.com/{key}",
        description="",
        size=10,
        last_modified=BASE_TIME + timedelta(minutes=minutes),
    )


async def test_list_newest_first(repository) -> None:
    for minutes in (5, 1, 9, 3):
        await add_image(repository, minutes)
    await repository.commit()

    images = await repository.list_newest_first()

    stamps = [image.last_modified for image in images]
    assert stamps == sorted(stamps, reverse=True)
    assert len(images) == 4


async def test_list_newest_first_with_limit_and_offset(repository) -> None:
    created = [await add_image(repository, minutes) for minutes in range(5)]
    await repository.commit()
    newest_first = [image.id for image in reversed(created)]

    page = await repository.list_newest_first(limit=2, offset=2)

    assert [image.id for image in page] == newest_first[2:4]


async def test_get_find_count_delete(repository) -> None:
    image = await add_image(repository, 0, name="known.jpg")
    await repository.commit()

    assert (await repository.get_by_id(image.id)).name == "known.jpg"
    assert (await repository.find_by_name("known.jpg")).id == image.id
    assert await repository.find_by_name("missing.jpg") is None
    assert await repository.count() == 1

    assert await repository.delete(image.id) is True
    assert await repository.delete(image.id) is False
    await repository.commit()
    assert await repository.count() == 0


async def test_to_dict_uses_external_field_names(repository) -> None:
    image = await add_image(repository, 0)

    data = image.to_dict()

    assert set(data) == {"id", "name", "url", "description", "size", "lastModified"}
    assert data["id"] == str(image.id)


async def test_schema_creation_is_idempotent(db_pool: AsyncDBPool, repository) -> None:
    await add_image(repository, 0)
    await repository.commit()

    await db_pool.create_schema()

    assert await repository.count() == 1


async def test_connect_failure_is_raised() -> None:
    with pytest.raises(Exception):
        await AsyncDBPool.connect("sqlite+aiosqlite:////nonexistent/dir/db.sqlite", DatabaseConfig())
