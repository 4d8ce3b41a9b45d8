"""
Pytest configuration and fixtures.
"""
import os

# Settings are read at import time, so the environment comes first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("BACKEND_URL", "http://backend.test")
os.environ.setdefault("S3_BUCKET_NAME", "pixshare-test")

import pytest
from httpx import ASGITransport, AsyncClient

from pixshare.core.database import Database
from pixshare.core.exceptions import IdentityExchangeError, MediaStorageError
from pixshare.core.security import issue_credential
from pixshare.main import app
from pixshare.schemas.auth import Principal
from pixshare.services.storage_interface import StoredObject

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeStorage:
    """In-memory media gateway."""

    def __init__(self):
        self.objects = {}
        self.destroyed = []
        self.store_calls = 0
        self.fail_store = False
        self.fail_destroy = False

    async def store(self, data, folder, filename, content_type="application/octet-stream"):
        self.store_calls += 1
        if self.fail_store:
            raise MediaStorageError("Failed to upload to storage: host unreachable")
        object_id = f"{folder}/{self.store_calls}-{filename}"
        self.objects[object_id] = data
        return StoredObject(
            url=f"https://media.test/{object_id}",
            object_id=object_id,
            size_bytes=len(data),
        )

    async def destroy(self, object_id):
        if self.fail_destroy:
            raise MediaStorageError(f"Failed to delete {object_id} from storage")
        self.objects.pop(object_id, None)
        self.destroyed.append(object_id)


class FakeIdentityProvider:
    def __init__(self, principal=None, fail=False):
        self.principal = principal
        self.fail = fail
        self.codes = []

    def authorization_url(self):
        return "https://accounts.test/o/oauth2/auth?client_id=test-client"

    async def exchange_code(self, code):
        self.codes.append(code)
        if self.fail:
            raise IdentityExchangeError()
        return self.principal


def auth_headers(principal: Principal) -> dict:
    return {"Authorization": f"Bearer {issue_credential(principal)}"}


@pytest.fixture
def owner():
    return Principal(user_id="owner-1", email="owner@x.com", name="Olive Owner", picture="https://img.test/o.png")


@pytest.fixture
def member():
    return Principal(user_id="member-1", email="a@x.com", name="Ada Member")


@pytest.fixture
def stranger():
    return Principal(user_id="stranger-1", email="c@x.com", name="Cy Stranger")


@pytest.fixture(scope="function")
async def database():
    """Create test database."""
    database = Database(TEST_DATABASE_URL)
    await database.create_all()

    yield database

    await database.drop_all()
    await database.dispose()


@pytest.fixture
async def db_session(database):
    async with database.sessionmaker() as session:
        yield session


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def identity_provider(member):
    return FakeIdentityProvider(principal=member)


@pytest.fixture(scope="function")
async def client(database, storage, identity_provider):
    """Create test client wired to the test database and fake collaborators."""
    app.state.database = database
    app.state.storage = storage
    app.state.identity_provider = identity_provider

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def create_album(client: AsyncClient, principal: Principal, name: str = "Trip", **extra) -> str:
    response = await client.post(
        "/albums",
        json={"name": name, **extra},
        headers=auth_headers(principal)
    )
    assert response.status_code == 201, response.text
    return response.json()["album"]["albumId"]


async def share_album(client: AsyncClient, owner: Principal, album_id: str, *emails: str):
    response = await client.post(
        f"/albums/{album_id}/share",
        json={"emails": list(emails)},
        headers=auth_headers(owner)
    )
    assert response.status_code == 200, response.text
    return response.json()
