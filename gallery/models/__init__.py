"""
SQLAlchemy models for the image gallery.
"""

from .base import Base
from .image import Image

__all__: list[str] = ["Base", "Image"]
