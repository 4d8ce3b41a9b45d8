import logging
import os
import uuid
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from pixshare.core.config import Settings, settings as default_settings
from pixshare.core.exceptions import MediaStorageError
from pixshare.services.storage_interface import StoredObject

logger = logging.getLogger(__name__)


class S3Service:
    """
    S3 Compatible Storage Service (R2, AWS, MinIO).
    Implements StorageInterface.

    boto3 is blocking, so each network call runs in the threadpool.
    """

    def __init__(self, settings: Optional[Settings] = None, client=None):
        settings = settings or default_settings
        self.endpoint_url = settings.S3_ENDPOINT_URL or None
        self.bucket_name = settings.S3_BUCKET_NAME
        self.region_name = settings.S3_REGION_NAME
        self.public_url_base = settings.S3_PUBLIC_URL_BASE.rstrip("/")

        if client is None:
            session = boto3.session.Session()
            client = session.client(
                's3',
                endpoint_url=self.endpoint_url,
                aws_access_key_id=settings.S3_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.S3_SECRET_ACCESS_KEY or None,
                region_name=self.region_name,
                config=Config(signature_version='s3v4')
            )
        self.s3_client = client

    def build_key(self, folder: str, filename: str) -> str:
        """Fresh object key under ``folder``, keeping the original extension."""
        _, ext = os.path.splitext(filename or "")
        return f"{folder.strip('/')}/{uuid.uuid4()}{ext.lower()}"

    def public_url(self, key: str) -> str:
        if self.public_url_base:
            return f"{self.public_url_base}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket_name}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region_name}.amazonaws.com/{key}"

    async def store(
        self,
        data: bytes,
        folder: str,
        filename: str,
        content_type: str = "application/octet-stream"
    ) -> StoredObject:
        key = self.build_key(folder, filename)

        def _put():
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type
            )

        try:
            await run_in_threadpool(_put)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload failed for {key}: {e}")
            raise MediaStorageError(f"Failed to upload to storage: {e}") from e

        return StoredObject(url=self.public_url(key), object_id=key, size_bytes=len(data))

    async def destroy(self, object_id: str) -> None:
        def _delete():
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=object_id)

        try:
            await run_in_threadpool(_delete)
        except (BotoCoreError, ClientError) as e:
            raise MediaStorageError(f"Failed to delete {object_id} from storage: {e}") from e
