"""Gallery client: view state and the HTTP calls that drive it."""

from .client import GalleryClient, SelectedFile
from .state import (
    NOTIFICATION_TTL,
    PAGE_SIZE,
    GalleryImage,
    GalleryState,
    Notification,
    NotificationKind,
    ViewMode,
)

__all__ = [
    "NOTIFICATION_TTL",
    "PAGE_SIZE",
    "GalleryClient",
    "GalleryImage",
    "GalleryState",
    "Notification",
    "NotificationKind",
    "SelectedFile",
    "ViewMode",
]
