"""
Albums API endpoints: CRUD and sharing by email.
"""
from fastapi import APIRouter, Depends, status

from pixshare.api.deps import get_album_repository, get_current_principal
from pixshare.schemas.albums import (
    AlbumCreate,
    AlbumEnvelope,
    AlbumListResponse,
    AlbumUpdate,
    ShareRequest,
    ShareResponse,
)
from pixshare.schemas.auth import MessageResponse, Principal
from pixshare.services.album_repository import AlbumRepository

router = APIRouter()


# Create album
@router.post("", response_model=AlbumEnvelope, status_code=status.HTTP_201_CREATED)
async def create_album(
    album_data: AlbumCreate,
    principal: Principal = Depends(get_current_principal),
    albums: AlbumRepository = Depends(get_album_repository)
):
    album = await albums.create(album_data.name, album_data.description, principal)
    return {"message": "Album created successfully", "album": album}


# List albums
@router.get("", response_model=AlbumListResponse)
async def list_albums(
    principal: Principal = Depends(get_current_principal),
    albums: AlbumRepository = Depends(get_album_repository)
):
    """Albums owned by or shared with the current user, newest first."""
    return {"albums": await albums.list_for(principal)}


# Get album details
@router.get("/{album_id}", response_model=AlbumEnvelope, response_model_exclude_none=True)
async def get_album(
    album_id: str,
    principal: Principal = Depends(get_current_principal),
    albums: AlbumRepository = Depends(get_album_repository)
):
    return {"album": await albums.get_accessible(album_id, principal)}


# Update album description
@router.post("/{album_id}", response_model=AlbumEnvelope)
async def update_album(
    album_id: str,
    album_data: AlbumUpdate,
    principal: Principal = Depends(get_current_principal),
    albums: AlbumRepository = Depends(get_album_repository)
):
    """Owner only. An empty description leaves the current one in place."""
    album = await albums.update_description(album_id, principal, album_data.description)
    return {"message": "Album updated successfully", "album": album}


# Share album
@router.post("/{album_id}/share", response_model=ShareResponse)
async def share_album(
    album_id: str,
    share_data: ShareRequest,
    principal: Principal = Depends(get_current_principal),
    albums: AlbumRepository = Depends(get_album_repository)
):
    """Owner only. Invalid addresses are dropped; existing members are skipped."""
    album = await albums.share(album_id, principal, share_data.emails)
    return {"message": "Album shared successfully", "shared_with": album.shared_with}


# Delete album
@router.delete("/{album_id}", response_model=MessageResponse)
async def delete_album(
    album_id: str,
    principal: Principal = Depends(get_current_principal),
    albums: AlbumRepository = Depends(get_album_repository)
):
    """Owner only. Removes every image record in the album as well."""
    await albums.delete(album_id, principal)
    return {"message": "Album and all associated images deleted successfully"}
