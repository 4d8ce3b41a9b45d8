"""
Album model and its shared-member rows.
"""
from datetime import datetime, timezone
from typing import List
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from pixshare.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Album(Base):
    """A named, owned collection of images."""

    __tablename__ = "albums"

    album_id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    owner_id = Column(String(255), nullable=False, index=True)
    owner_email = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)

    members = relationship(
        "AlbumMember",
        back_populates="album",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AlbumMember.id",
    )

    @property
    def shared_with(self) -> List[str]:
        """Emails the album is shared with, in the order they were added."""
        return [member.email for member in self.members]

    def __repr__(self):
        return f"<Album {self.name} ({self.album_id})>"


class AlbumMember(Base):
    """One email the album is shared with."""

    __tablename__ = "album_members"
    __table_args__ = (
        UniqueConstraint("album_id", "email", name="uq_album_members_album_email"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    album_id = Column(
        String(36),
        ForeignKey("albums.album_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    email = Column(String(255), nullable=False, index=True)
    added_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    album = relationship("Album", back_populates="members")

    def __repr__(self):
        return f"<AlbumMember {self.email} -> {self.album_id}>"
