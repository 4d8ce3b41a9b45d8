"""
Access-control predicates shared by every album and image operation.

They are evaluated fresh on each request against the loaded documents.
"""
from pixshare.core.exceptions import Forbidden
from pixshare.models.album import Album
from pixshare.models.image import Image
from pixshare.schemas.auth import Principal


def has_access(principal: Principal, album: Album) -> bool:
    """Owner or shared member."""
    return principal.user_id == album.owner_id or principal.email in album.shared_with


def can_modify(principal: Principal, album: Album) -> bool:
    """Description edits, sharing and deletion are owner-only."""
    return principal.user_id == album.owner_id


def can_delete_image(principal: Principal, album: Album, image: Image) -> bool:
    return principal.user_id == album.owner_id or principal.user_id == image.uploaded_by


def require_access(principal: Principal, album: Album) -> None:
    if not has_access(principal, album):
        raise Forbidden("You do not have access to this album")


def require_owner(principal: Principal, album: Album, action: str) -> None:
    if not can_modify(principal, album):
        raise Forbidden(f"Only the album owner can {action} it")
