"""
Image API endpoints nested under an album.
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile, status

from pixshare.api.deps import get_current_principal, get_image_repository
from pixshare.core.exceptions import ValidationFailed
from pixshare.core.file_security import read_validated_upload, sanitize_filename
from pixshare.schemas.auth import MessageResponse, Principal
from pixshare.schemas.images import (
    CommentCreate,
    CommentListResponse,
    FavoriteResponse,
    FavoriteUpdate,
    ImageEnvelope,
    ImageListResponse,
    ImageUrlResponse,
)
from pixshare.services.image_repository import ImageRepository, parse_tag_filter

router = APIRouter()


@router.post(
    "/{album_id}/images",
    response_model=ImageEnvelope,
    status_code=status.HTTP_201_CREATED
)
async def upload_image(
    album_id: str,
    file: Optional[UploadFile] = File(None),
    tags: Optional[List[str]] = Form(None),
    person: Optional[str] = Form(None),
    is_favorite: Optional[str] = Form(None, alias="isFavorite"),
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    """
    Multipart upload of a single image (``file``) plus optional ``tags``
    (repeated fields, or one JSON-encoded list), ``person`` and ``isFavorite`` fields.
    """
    if file is None:
        raise ValidationFailed("No file uploaded")

    content = await read_validated_upload(file)

    # A single field may carry a JSON-encoded list
    if tags and len(tags) == 1:
        tags = tags[0]

    image = await images.upload(
        album_id,
        principal,
        data=content,
        filename=sanitize_filename(file.filename),
        content_type=file.content_type,
        tags=tags,
        person=person,
        is_favorite=(is_favorite or "").lower() == "true",
    )
    return {"message": "Image uploaded successfully", "image": image}


@router.get("/{album_id}/images", response_model=ImageListResponse)
async def list_images(
    album_id: str,
    tags: Optional[str] = Query(None, description="Comma-separated tags, any-of match"),
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    return {"images": await images.list(album_id, principal, parse_tag_filter(tags))}


@router.get("/{album_id}/images/favorites", response_model=ImageListResponse)
async def list_favorite_images(
    album_id: str,
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    return {"images": await images.list_favorites(album_id, principal)}


@router.put("/{album_id}/images/{image_id}/favorite", response_model=FavoriteResponse)
async def update_favorite(
    album_id: str,
    image_id: str,
    payload: Optional[FavoriteUpdate] = Body(None),
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    """Set ``isFavorite`` when given, toggle otherwise."""
    is_favorite = await images.set_favorite(
        album_id,
        image_id,
        principal,
        payload.is_favorite if payload else None
    )
    return {"message": "Image favorite status updated", "is_favorite": is_favorite}


@router.post("/{album_id}/images/{image_id}/comments", response_model=CommentListResponse)
async def add_comment(
    album_id: str,
    image_id: str,
    payload: CommentCreate,
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    comments = await images.add_comment(album_id, image_id, principal, payload.comment)
    return {"message": "Comment added successfully", "comments": comments}


@router.delete("/{album_id}/images/{image_id}", response_model=MessageResponse)
async def delete_image(
    album_id: str,
    image_id: str,
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    """Album owner or the uploader only."""
    await images.delete(album_id, image_id, principal)
    return {"message": "Image deleted successfully"}


@router.get("/{album_id}/images/{image_id}/url", response_model=ImageUrlResponse)
async def get_image_url(
    album_id: str,
    image_id: str,
    principal: Principal = Depends(get_current_principal),
    images: ImageRepository = Depends(get_image_repository)
):
    image = await images.get_url(album_id, image_id, principal)
    return {"url": image.storage_url, "image_id": image.image_id, "name": image.name}
