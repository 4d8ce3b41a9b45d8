"""
Image model. ``album_id`` refers to an album by identifier only; there is no
foreign key, so album deletion removes images with an explicit bulk delete.
"""
from sqlalchemy import JSON, BigInteger, Boolean, Column, DateTime, String

from pixshare.core.database import Base
from pixshare.models.album import new_id, utcnow


class Image(Base):
    """Image stored on the media host, with tags, comments and a favorite flag."""

    __tablename__ = "images"

    image_id = Column(String(36), primary_key=True, default=new_id)
    album_id = Column(String(36), nullable=False, index=True)

    # File metadata
    name = Column(String(500), nullable=False)
    filename = Column(String(500), nullable=False)
    size_bytes = Column(BigInteger, nullable=False)

    # Media host location
    storage_url = Column(String(2048), nullable=False)
    storage_object_id = Column(String(1024), nullable=False)

    # User-editable fields
    tags = Column(JSON, nullable=False, default=list)
    person = Column(String(255), nullable=False, default="")
    is_favorite = Column(Boolean, nullable=False, default=False)
    # [{"user_id", "user_email", "text", "created_at"}], append-only
    comments = Column(JSON, nullable=False, default=list)

    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    uploaded_by = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Image {self.name} ({self.image_id})>"
