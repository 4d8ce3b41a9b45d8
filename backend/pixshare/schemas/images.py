from datetime import datetime
from typing import List, Optional

from pixshare.schemas.base import CamelModel, RequestModel


class CommentCreate(RequestModel):
    comment: str


class FavoriteUpdate(RequestModel):
    is_favorite: Optional[bool] = None


class CommentOut(CamelModel):
    user_id: str
    user_email: str
    text: str
    created_at: datetime


class ImageOut(CamelModel):
    image_id: str
    album_id: str
    name: str
    filename: str
    storage_url: str
    tags: List[str] = []
    person: str = ""
    is_favorite: bool = False
    comments: List[CommentOut] = []
    size_bytes: int
    uploaded_at: datetime
    uploaded_by: str


class ImageEnvelope(CamelModel):
    message: str
    image: ImageOut


class ImageListResponse(CamelModel):
    images: List[ImageOut]


class FavoriteResponse(CamelModel):
    message: str
    is_favorite: bool


class CommentListResponse(CamelModel):
    message: str
    comments: List[CommentOut]


class ImageUrlResponse(CamelModel):
    url: str
    image_id: str
    name: str
