"""
Upload boundary checks: content type and size, before any storage call.
"""
import os

from fastapi import UploadFile

from pixshare.core.config import settings
from pixshare.core.exceptions import PayloadTooLarge, ValidationFailed

ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
}


def validate_mime_type(file: UploadFile) -> None:
    if (file.content_type or "").lower() not in ALLOWED_MIME_TYPES:
        raise ValidationFailed("Only image files (jpg, jpeg, png, gif, webp) are allowed")


async def read_limited(file: UploadFile, max_bytes: int = None) -> bytes:
    """Read the upload, refusing anything past ``max_bytes``."""
    max_bytes = max_bytes or settings.max_file_size_bytes
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise PayloadTooLarge(f"File too large. Max: {max_bytes // 1024 // 1024}MB")
    return content


def sanitize_filename(filename: str) -> str:
    """Drop any client-supplied path components."""
    name = os.path.basename((filename or "").replace("\\", "/")).strip()
    return name or "upload"


async def read_validated_upload(file: UploadFile) -> bytes:
    validate_mime_type(file)
    return await read_limited(file)
