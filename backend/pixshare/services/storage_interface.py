from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class StoredObject:
    """What the media host hands back after a successful upload."""

    url: str
    object_id: str
    size_bytes: int


class StorageInterface(Protocol):
    """
    Media gateway contract.

    Both calls are awaited by the caller. Failures raise
    ``MediaStorageError``; nothing is retried here.
    """

    async def store(
        self,
        data: bytes,
        folder: str,
        filename: str,
        content_type: str = "application/octet-stream"
    ) -> StoredObject:
        """Upload ``data`` under ``folder`` and return its durable URL and handle."""
        ...

    async def destroy(self, object_id: str) -> None:
        """Delete the object identified by ``object_id``."""
        ...
