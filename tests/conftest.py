"""Shared fixtures: in-memory database, fake bucket and an app wired to both."""

from collections.abc import AsyncIterator

import httpx
import pytest
from fastapi import FastAPI

from gallery.core.context import AppContext
from gallery.core.database import AsyncDBPool
from gallery.core.storage import StorageError
from gallery.main import create_app
from gallery.main_config import DatabaseConfig, GalleryConfig
from gallery.repository.image_repository import ImageRepository

BUCKET = "test-bucket"
REGION = "eu-west-1"


class FakeStorage:
    """In-memory stand-in for ObjectStorageClient."""

    def __init__(self, bucket: str = BUCKET, region: str = REGION) -> None:
        self.bucket = bucket
        self.region = region
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_put = False
        self.fail_delete = False
        self.deleted: list[str] = []

    def url_for(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def put(self, key: str, body: bytes, content_type: str, content_length: int) -> None:
        if self.fail_put:
            raise StorageError("put", key, RuntimeError("bucket unavailable"))
        assert content_length == len(body)
        self.objects[key] = (body, content_type)

    async def delete(self, key: str) -> None:
        if self.fail_delete:
            raise StorageError("delete", key, RuntimeError("bucket unavailable"))
        self.objects.pop(key, None)
        self.deleted.append(key)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def gallery_config() -> GalleryConfig:
    return GalleryConfig(compensate_partial_failures=True, max_upload_bytes=None, default_page_size=12)


@pytest.fixture
async def db_pool() -> AsyncIterator[AsyncDBPool]:
    pool = await AsyncDBPool.connect("sqlite+aiosqlite:///:memory:", DatabaseConfig())
    yield pool
    await pool.dispose()


@pytest.fixture
async def session(db_pool: AsyncDBPool):
    async with db_pool.get_session() as session:
        yield session


@pytest.fixture
def repository(session) -> ImageRepository:
    return ImageRepository(session)


@pytest.fixture
def app(db_pool: AsyncDBPool, storage: FakeStorage, gallery_config: GalleryConfig) -> FastAPI:
    """Full application without the startup lifespan; the context is set directly."""
    test_app = create_app(lifespan=None)
    test_app.state.context = AppContext(db=db_pool, storage=storage, gallery_config=gallery_config)
    return test_app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield http
