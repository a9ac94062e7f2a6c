"""
Async HTTP client that drives a GalleryState against the images API.

Each user action is one network call plus a state update and a notification:

    refresh()  GET /api/images, replace the list
    upload()   POST /api/images (multipart), then refresh()
    delete()   DELETE /api/images?id=..., remove the image locally

While a call is outstanding the matching flag (``uploading`` or the image's
``deleting`` entry) is set so a UI can disable the control. Failures never
raise out of these methods; they become error notifications.

Usage:
    async with httpx.AsyncClient(base_url="http://localhost:8000") as http:
        client = GalleryClient(http)
        await client.refresh()
        await client.upload(SelectedFile("cat.jpg", data, "image/jpeg"), "my cat")
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx
from pydantic import BaseModel, Field

from gallery.ui.state import GalleryImage, GalleryState, NotificationKind

__all__ = ["ClientConfig", "GalleryClient", "SelectedFile", "TimeoutConfig", "build_http_client"]

logger = logging.getLogger(__name__)

IMAGES_PATH = "/api/images"


class TimeoutConfig(BaseModel):
    """HTTP client timeout settings."""

    connect: float = Field(default=5.0, description="Connection timeout (seconds)")
    read: float = Field(default=30.0, description="Read timeout (seconds)")
    write: float = Field(default=60.0, description="Write timeout (seconds), uploads included")
    pool: float = Field(default=30.0, description="Pool timeout (seconds)")

    def to_httpx_timeout(self) -> httpx.Timeout:
        """Convert to httpx.Timeout."""
        return httpx.Timeout(**self.model_dump())


class ClientConfig(BaseModel):
    """HTTP client configuration."""

    base_url: str = Field(default="http://localhost:8000", description="Gallery API root")
    timeout: TimeoutConfig = Field(default_factory=TimeoutConfig)
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


def build_http_client(config: ClientConfig | None = None) -> httpx.AsyncClient:
    config = config or ClientConfig()
    return httpx.AsyncClient(
        base_url=config.base_url,
        timeout=config.timeout.to_httpx_timeout(),
        verify=config.verify_ssl,
    )


@dataclass
class SelectedFile:
    """A file picked for upload."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class GalleryClient:
    """Performs gallery actions and records their outcome in ``state``."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        state: GalleryState | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.http = http
        self.state = state or GalleryState()
        self._clock = clock

    def _now(self) -> float | None:
        return self._clock() if self._clock else None

    def _notify(self, message: str, kind: NotificationKind) -> None:
        self.state.notify(message, kind, now=self._now())

    async def refresh(self) -> bool:
        """Fetch the full list once and replace the local copy."""
        self.state.loading = True
        try:
            response = await self.http.get(IMAGES_PATH)
            response.raise_for_status()
            images = [GalleryImage.model_validate(item) for item in response.json()["data"]]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.error("Failed to fetch images: %s", exc)
            self._notify("Failed to load images", NotificationKind.ERROR)
            return False
        finally:
            self.state.loading = False

        self.state.replace_images(images)
        self._notify("Images fetched successfully", NotificationKind.SUCCESS)
        return True

    async def upload(self, file: SelectedFile | None, description: str = "") -> bool:
        """Upload ``file`` with ``description`` and refetch the list on success."""
        if file is None:
            self._notify("Please select an image to upload", NotificationKind.ERROR)
            return False

        self.state.uploading = True
        try:
            response = await self.http.post(
                IMAGES_PATH,
                data={"description": description},
                files={"image": (file.filename, file.content, file.content_type)},
            )
            response.raise_for_status()
            await self.refresh()
        except httpx.HTTPError as exc:
            logger.error("Error uploading image: %s", exc)
            self._notify("Failed to upload image", NotificationKind.ERROR)
            return False
        finally:
            self.state.uploading = False

        self._notify(f"Successfully uploaded {file.filename}", NotificationKind.SUCCESS)
        return True

    async def delete(self, image: GalleryImage) -> bool:
        """Delete ``image`` on the server, then drop it from the local list."""
        self.state.set_deleting(image.id, True)
        try:
            response = await self.http.delete(IMAGES_PATH, params={"id": image.id})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("Error deleting image: %s", exc)
            self._notify("Failed to delete image", NotificationKind.ERROR)
            return False
        finally:
            self.state.set_deleting(image.id, False)

        self.state.remove_image(image.id)
        self._notify(f"Successfully deleted {image.name}", NotificationKind.SUCCESS)
        return True
