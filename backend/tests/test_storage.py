"""
Tests for the S3 media gateway and the provider factory.
"""
import boto3
import pytest
from botocore.stub import ANY, Stubber

from pixshare.core.config import Settings
from pixshare.core.exceptions import MediaStorageError
from pixshare.services.storage_factory import create_storage_service
from pixshare.services.storage_providers.s3_service import S3Service


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "JWT_SECRET_KEY": "unused",
        "S3_BUCKET_NAME": "photos",
        "S3_REGION_NAME": "us-east-1",
        "S3_ACCESS_KEY_ID": "test-key",
        "S3_SECRET_ACCESS_KEY": "test-secret",
        "S3_PUBLIC_URL_BASE": "https://cdn.test/",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="test-key",
        aws_secret_access_key="test-secret",
    )


async def test_store_puts_object_under_folder(s3_client):
    service = S3Service(make_settings(), client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "put_object",
            {"ETag": '"abc"'},
            {"Bucket": "photos", "Key": ANY, "Body": b"image-bytes", "ContentType": "image/png"},
        )
        stored = await service.store(b"image-bytes", "pixshare/album-1", "Photo.PNG", "image/png")
        stubber.assert_no_pending_responses()

    assert stored.object_id.startswith("pixshare/album-1/")
    assert stored.object_id.endswith(".png")
    assert stored.url == f"https://cdn.test/{stored.object_id}"
    assert stored.size_bytes == len(b"image-bytes")


def test_store_uses_fresh_keys(s3_client):
    service = S3Service(make_settings(), client=s3_client)

    assert service.build_key("a", "x.jpg") != service.build_key("a", "x.jpg")


async def test_store_failure_raises_media_storage_error(s3_client):
    service = S3Service(make_settings(), client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
        with pytest.raises(MediaStorageError) as exc_info:
            await service.store(b"data", "pixshare/album-1", "a.jpg", "image/jpeg")

    assert exc_info.value.status_code == 502


async def test_destroy(s3_client):
    service = S3Service(make_settings(), client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_response("delete_object", {}, {"Bucket": "photos", "Key": "pixshare/album-1/x.jpg"})
        await service.destroy("pixshare/album-1/x.jpg")
        stubber.assert_no_pending_responses()


async def test_destroy_failure(s3_client):
    service = S3Service(make_settings(), client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_client_error("delete_object", service_error_code="InternalError", http_status_code=500)
        with pytest.raises(MediaStorageError):
            await service.destroy("pixshare/album-1/x.jpg")


def test_public_url_fallbacks(s3_client):
    endpoint = S3Service(
        make_settings(S3_PUBLIC_URL_BASE="", S3_ENDPOINT_URL="https://r2.test/"),
        client=s3_client,
    )
    assert endpoint.public_url("k/1.jpg") == "https://r2.test/photos/k/1.jpg"

    aws = S3Service(make_settings(S3_PUBLIC_URL_BASE=""), client=s3_client)
    assert aws.public_url("k/1.jpg") == "https://photos.s3.us-east-1.amazonaws.com/k/1.jpg"


def test_factory_builds_s3_service():
    service = create_storage_service(make_settings(STORAGE_PROVIDER="S3"))

    assert isinstance(service, S3Service)
    assert service.bucket_name == "photos"


def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError, match="Unknown storage provider 'b2'"):
        create_storage_service(make_settings(STORAGE_PROVIDER="b2"))
