"""
View state of the gallery page.

Holds the full image list in memory and derives everything else from it:
pagination is client-side with a fixed page size, the view toggles between
grid and list, and per-image flags track which thumbnails finished loading
and which deletes are in flight. Notifications are transient: each expires
``NOTIFICATION_TTL`` seconds after it was raised unless dismissed earlier.

Time is passed in explicitly (``now``) so callers decide the clock.

Usage:
    state = GalleryState()
    state.replace_images(images)
    state.set_page(2)
    for image in state.page_items:
        ...
"""

import itertools
import math
import time
from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field

__all__ = [
    "NOTIFICATION_TTL",
    "PAGE_SIZE",
    "GalleryImage",
    "GalleryState",
    "Notification",
    "NotificationKind",
    "ViewMode",
]

PAGE_SIZE = 12
NOTIFICATION_TTL = 5.0


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class GalleryImage(BaseModel):
    """One image as returned by ``GET /api/images``."""

    id: str
    name: str
    url: str
    description: str | None = None
    size: int | None = None
    last_modified: datetime | None = Field(
        default=None, validation_alias=AliasChoices("lastModified", "last_modified")
    )


class Notification(BaseModel):
    id: str
    message: str
    kind: NotificationKind
    created_at: float

    def expired(self, now: float, ttl: float = NOTIFICATION_TTL) -> bool:
        return now - self.created_at >= ttl


class GalleryState:
    """In-memory state behind the gallery page."""

    def __init__(self, page_size: int = PAGE_SIZE, notification_ttl: float = NOTIFICATION_TTL) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.page_size = page_size
        self.notification_ttl = notification_ttl
        self.images: list[GalleryImage] = []
        self.view = ViewMode.GRID
        self.current_page = 1
        self.loading = False
        self.uploading = False
        self.loaded: dict[str, bool] = {}
        self.deleting: dict[str, bool] = {}
        self.notifications: list[Notification] = []
        self._notification_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Images and pagination
    # ------------------------------------------------------------------

    def replace_images(self, images: list[GalleryImage]) -> None:
        self.images = list(images)
        self._clamp_page()

    def remove_image(self, image_id: str) -> None:
        self.images = [image for image in self.images if image.id != image_id]
        self.loaded.pop(image_id, None)
        self._clamp_page()

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.images) / self.page_size)

    @property
    def page_numbers(self) -> list[int]:
        return list(range(1, self.total_pages + 1))

    @property
    def page_items(self) -> list[GalleryImage]:
        """Images on the current page: indices [(p-1)*size, min(p*size, n))."""
        start = (self.current_page - 1) * self.page_size
        return self.images[start : start + self.page_size]

    def set_page(self, page: int) -> None:
        if page < 1 or (self.total_pages and page > self.total_pages):
            raise ValueError(f"page {page} out of range 1..{max(self.total_pages, 1)}")
        self.current_page = page

    def _clamp_page(self) -> None:
        # Deleting the last image on the last page must not leave an empty page selected
        self.current_page = min(self.current_page, max(self.total_pages, 1))

    def set_view(self, view: ViewMode | str) -> None:
        self.view = ViewMode(view)

    # ------------------------------------------------------------------
    # Per-image flags
    # ------------------------------------------------------------------

    def mark_loaded(self, image_id: str) -> None:
        self.loaded[image_id] = True

    def is_loaded(self, image_id: str) -> bool:
        return self.loaded.get(image_id, False)

    def set_deleting(self, image_id: str, deleting: bool) -> None:
        self.deleting[image_id] = deleting

    def is_deleting(self, image_id: str) -> bool:
        return self.deleting.get(image_id, False)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def notify(
        self, message: str, kind: NotificationKind | str, now: float | None = None
    ) -> Notification:
        notification = Notification(
            id=str(next(self._notification_ids)),
            message=message,
            kind=NotificationKind(kind),
            created_at=time.monotonic() if now is None else now,
        )
        self.notifications.append(notification)
        return notification

    def dismiss(self, notification_id: str) -> None:
        self.notifications = [n for n in self.notifications if n.id != notification_id]

    def expire(self, now: float | None = None) -> list[Notification]:
        """Drop notifications older than the TTL and return them."""
        now = time.monotonic() if now is None else now
        expired = [n for n in self.notifications if n.expired(now, self.notification_ttl)]
        if expired:
            self.notifications = [n for n in self.notifications if n not in expired]
        return expired

    def active_notifications(self, now: float | None = None) -> list[Notification]:
        self.expire(now)
        return list(self.notifications)
