"""
Image model for storing uploaded image metadata.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid, func

from .base import Base, utc_now


class Image(Base):
    """
    Image model representing one object stored in the bucket.

    Attributes:
        id: Unique identifier for the image, generated at upload
        name: Storage key of the object (``<uuid>.<ext>``)
        url: Public address of the object
        description: Optional free text supplied with the upload
        size: Byte length of the uploaded payload
        last_modified: Timestamp when the image was uploaded
    """

    __tablename__ = "images"

    id = Column(Uuid(as_uuid=True), primary_key=True)
    name = Column(String(255), nullable=False, unique=True)
    url = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    size = Column(Integer)
    last_modified = Column(
        DateTime(timezone=True), default=utc_now, server_default=func.now(), index=True
    )

    def __repr__(self) -> str:
        return f"<Image(id={self.id}, name='{self.name}')>"

    def to_dict(self) -> dict:
        """Convert image object to its external representation."""
        return {
            "id": str(self.id),
            "name": self.name,
            "url": self.url,
            "description": self.description,
            "size": self.size,
            "lastModified": self.last_modified.isoformat() if self.last_modified else None,
        }
