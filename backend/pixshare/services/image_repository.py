"""
Image CRUD scoped to an album: upload, listing, favorites, comments, deletion.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pixshare.core.config import settings
from pixshare.core.exceptions import Forbidden, MediaStorageError, NotFound, ValidationFailed
from pixshare.core.permissions import can_delete_image
from pixshare.models.album import Album
from pixshare.models.image import Image
from pixshare.schemas.auth import Principal
from pixshare.services.album_repository import AlbumRepository
from pixshare.services.storage_interface import StorageInterface

logger = logging.getLogger(__name__)


def parse_tags(tags: Union[None, str, Sequence[Any]]) -> List[str]:
    """
    Accept a list or a JSON-encoded list. Anything that does not decode to a
    list becomes an empty list rather than an error.
    """
    if not tags:
        return []
    if isinstance(tags, str):
        try:
            tags = json.loads(tags)
        except ValueError:
            return []
    if not isinstance(tags, (list, tuple)):
        return []
    return [str(tag) for tag in tags if tag is not None]


def parse_tag_filter(raw: Optional[str]) -> List[str]:
    """``"a, b,"`` -> ``["a", "b"]``"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


class ImageRepository:
    def __init__(self, db: AsyncSession, storage: StorageInterface):
        self.db = db
        self.storage = storage
        self.albums = AlbumRepository(db)

    async def _get_image(self, album: Album, image_id: str) -> Image:
        result = await self.db.execute(
            select(Image).where(Image.image_id == image_id, Image.album_id == album.album_id)
        )
        image = result.scalar_one_or_none()
        if not image:
            raise NotFound("Image not found")
        return image

    async def upload(
        self,
        album_id: str,
        principal: Principal,
        data: bytes,
        filename: str,
        content_type: str,
        tags: Union[None, str, Sequence[Any]] = None,
        person: Optional[str] = None,
        is_favorite: bool = False,
    ) -> Image:
        """
        Push the bytes to the media host, then persist the record. A failed
        upload raises before anything is written.
        """
        album = await self.albums.get_accessible(album_id, principal)
        parsed_tags = parse_tags(tags)

        stored = await self.storage.store(
            data,
            folder=f"{settings.STORAGE_PATH_PREFIX}/{album.album_id}",
            filename=filename,
            content_type=content_type,
        )

        image = Image(
            album_id=album.album_id,
            name=filename,
            filename=filename,
            storage_url=stored.url,
            storage_object_id=stored.object_id,
            tags=parsed_tags,
            person=person or "",
            is_favorite=is_favorite,
            comments=[],
            size_bytes=stored.size_bytes,
            uploaded_by=principal.user_id,
        )
        self.db.add(image)
        await self.db.commit()
        return image

    async def list(
        self,
        album_id: str,
        principal: Principal,
        tag_filter: Optional[List[str]] = None
    ) -> List[Image]:
        """Newest first; with ``tag_filter`` keep images carrying any of the tags."""
        album = await self.albums.get_accessible(album_id, principal)

        result = await self.db.execute(
            select(Image)
            .where(Image.album_id == album.album_id)
            .order_by(Image.uploaded_at.desc())
        )
        images = list(result.scalars().all())

        if tag_filter:
            wanted = set(tag_filter)
            images = [image for image in images if wanted.intersection(image.tags or [])]
        return images

    async def list_favorites(self, album_id: str, principal: Principal) -> List[Image]:
        album = await self.albums.get_accessible(album_id, principal)

        result = await self.db.execute(
            select(Image)
            .where(Image.album_id == album.album_id, Image.is_favorite.is_(True))
            .order_by(Image.uploaded_at.desc())
        )
        return list(result.scalars().all())

    async def set_favorite(
        self,
        album_id: str,
        image_id: str,
        principal: Principal,
        is_favorite: Optional[bool] = None
    ) -> bool:
        """Set the flag when given, otherwise toggle it."""
        album = await self.albums.get_accessible(album_id, principal)
        image = await self._get_image(album, image_id)

        image.is_favorite = (not image.is_favorite) if is_favorite is None else is_favorite
        await self.db.commit()
        return image.is_favorite

    async def add_comment(
        self,
        album_id: str,
        image_id: str,
        principal: Principal,
        text: str
    ) -> List[Dict[str, Any]]:
        text = (text or "").strip()
        if not text:
            raise ValidationFailed("Comment cannot be empty")

        album = await self.albums.get_accessible(album_id, principal)
        image = await self._get_image(album, image_id)

        comment = {
            "user_id": principal.user_id,
            "user_email": principal.email,
            "text": text,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        # Reassign so the JSON column is flagged dirty
        image.comments = [*(image.comments or []), comment]
        await self.db.commit()
        return image.comments

    async def delete(self, album_id: str, image_id: str, principal: Principal) -> None:
        """
        Album owner or uploader only. The media object is removed first; if
        that fails the error is logged and the record is deleted anyway.
        """
        album = await self.albums.get(album_id)
        image = await self._get_image(album, image_id)

        if not can_delete_image(principal, album, image):
            raise Forbidden("You do not have permission to delete this image")

        try:
            await self.storage.destroy(image.storage_object_id)
        except MediaStorageError as e:
            logger.warning(f"Error deleting {image.storage_object_id} from media storage: {e}")

        await self.db.delete(image)
        await self.db.commit()

    async def get_url(self, album_id: str, image_id: str, principal: Principal) -> Image:
        album = await self.albums.get_accessible(album_id, principal)
        return await self._get_image(album, image_id)
