from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from pixshare.schemas.base import CamelModel, RequestModel


class AlbumCreate(RequestModel):
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Trip",
                "description": "Summer 2024"
            }
        }
    )


class AlbumUpdate(RequestModel):
    description: Optional[str] = None


class ShareRequest(RequestModel):
    emails: List[str] = Field(..., min_length=1)


class AlbumOut(CamelModel):
    album_id: str
    name: str
    description: str
    owner_id: str
    owner_email: str
    shared_with: List[str] = []
    created_at: datetime


class AlbumEnvelope(CamelModel):
    message: Optional[str] = None
    album: AlbumOut


class AlbumListResponse(CamelModel):
    albums: List[AlbumOut]


class ShareResponse(CamelModel):
    message: str
    shared_with: List[str]
