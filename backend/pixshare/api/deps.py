"""
Shared FastAPI dependencies: the current principal and the collaborators
built in the application lifespan.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pixshare.core.config import settings
from pixshare.core.database import get_db
from pixshare.core.exceptions import Unauthorized
from pixshare.core.security import verify_credential
from pixshare.schemas.auth import Principal
from pixshare.services.album_repository import AlbumRepository
from pixshare.services.google_oauth import IdentityProvider
from pixshare.services.image_repository import ImageRepository
from pixshare.services.storage_interface import StorageInterface

security = HTTPBearer(auto_error=False)


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Principal:
    """
    Cookie first, then ``Authorization: Bearer``. Missing, malformed and
    expired credentials all get the same 401.
    """
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token and credentials:
        token = credentials.credentials

    if not token:
        raise Unauthorized()

    principal = verify_credential(token)
    if principal is None:
        raise Unauthorized()
    return principal


def get_storage(request: Request) -> StorageInterface:
    return request.app.state.storage


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def get_album_repository(db: AsyncSession = Depends(get_db)) -> AlbumRepository:
    return AlbumRepository(db)


def get_image_repository(
    db: AsyncSession = Depends(get_db),
    storage: StorageInterface = Depends(get_storage)
) -> ImageRepository:
    return ImageRepository(db, storage)
