"""
Album CRUD and sharing.
"""
import logging
import re
from typing import Iterable, List, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pixshare.core.exceptions import NotFound, ValidationFailed
from pixshare.core.permissions import require_access, require_owner
from pixshare.models.album import Album, AlbumMember
from pixshare.models.image import Image
from pixshare.schemas.auth import Principal

logger = logging.getLogger(__name__)

# local-part "@" domain "." tld, no whitespace
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def filter_valid_emails(emails: Iterable[str]) -> List[str]:
    return [email for email in emails if isinstance(email, str) and EMAIL_PATTERN.fullmatch(email)]


class AlbumRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, name: str, description: Optional[str], owner: Principal) -> Album:
        if not name:
            raise ValidationFailed("Album name is required")

        album = Album(
            name=name,
            description=description or "",
            owner_id=owner.user_id,
            owner_email=owner.email,
        )
        # Start with an empty, already-loaded member list
        album.members = []

        self.db.add(album)
        await self.db.commit()
        return album

    async def list_for(self, principal: Principal) -> List[Album]:
        """Albums the principal owns or is a shared member of, newest first."""
        result = await self.db.execute(
            select(Album)
            .outerjoin(AlbumMember, AlbumMember.album_id == Album.album_id)
            .where(or_(Album.owner_id == principal.user_id, AlbumMember.email == principal.email))
            .order_by(Album.created_at.desc())
        )
        return list(result.scalars().unique().all())

    async def get(self, album_id: str, refresh: bool = False) -> Album:
        query = select(Album).where(Album.album_id == album_id)
        if refresh:
            query = query.execution_options(populate_existing=True)
        result = await self.db.execute(query)
        album = result.scalar_one_or_none()
        if not album:
            raise NotFound("Album not found")
        return album

    async def get_accessible(self, album_id: str, principal: Principal) -> Album:
        album = await self.get(album_id)
        require_access(principal, album)
        return album

    async def update_description(
        self,
        album_id: str,
        principal: Principal,
        description: Optional[str]
    ) -> Album:
        album = await self.get(album_id)
        require_owner(principal, album, "update")

        # A blank description keeps the current one
        if description:
            album.description = description
            await self.db.commit()
        return album

    async def share(self, album_id: str, principal: Principal, emails: List[str]) -> Album:
        album = await self.get(album_id)
        require_owner(principal, album, "share")

        valid_emails = filter_valid_emails(emails)
        if not valid_emails:
            raise ValidationFailed("No valid emails provided")

        self._add_members(album, valid_emails)
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent share added one of these emails first; retry against fresh rows
            await self.db.rollback()
            logger.info(f"Concurrent share on album {album_id}, retrying")
            album = await self.get(album_id, refresh=True)
            self._add_members(album, valid_emails)
            await self.db.commit()
        return album

    def _add_members(self, album: Album, emails: List[str]) -> None:
        """Append each email unless already shared or equal to the owner's."""
        current = set(album.shared_with)
        for email in emails:
            if email in current or email == album.owner_email:
                continue
            album.members.append(AlbumMember(email=email))
            current.add(email)

    async def delete(self, album_id: str, principal: Principal) -> int:
        """
        Delete the album and every image that references it.

        Images go first and are committed on their own; the album row follows
        in a second commit. A failure in between leaves the album in place.
        Returns the number of image records removed.
        """
        album = await self.get(album_id)
        require_owner(principal, album, "delete")

        result = await self.db.execute(delete(Image).where(Image.album_id == album_id))
        await self.db.commit()

        await self.db.delete(album)
        await self.db.commit()

        logger.info(f"Deleted album {album_id} and {result.rowcount} images")
        return result.rowcount
