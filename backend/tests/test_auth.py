"""
Tests for the credential codec and the auth endpoints.
"""
from datetime import timedelta

from httpx import AsyncClient

from pixshare.core.config import settings
from pixshare.core.security import (
    create_access_token,
    decode_token,
    issue_credential,
    verify_credential,
)
from pixshare.main import app
from pixshare.schemas.auth import Principal
from tests.conftest import FakeIdentityProvider, auth_headers


def test_issue_and_verify_credential(owner):
    token = issue_credential(owner)
    assert verify_credential(token) == owner

    claims = decode_token(token)
    assert claims["userId"] == "owner-1"
    assert claims["email"] == "owner@x.com"
    assert claims["exp"] - claims["iat"] == 7 * 24 * 60 * 60


def test_verify_rejects_expired_token(owner):
    token = create_access_token(owner.model_dump(by_alias=True), expires_delta=timedelta(seconds=-1))
    assert verify_credential(token) is None


def test_verify_rejects_tampered_token(owner, stranger):
    header, _, signature = issue_credential(owner).split(".")
    _, forged_payload, _ = issue_credential(stranger).split(".")

    assert verify_credential(f"{header}.{forged_payload}.{signature}") is None
    assert verify_credential("not-a-jwt") is None


def test_verify_rejects_token_without_identity():
    assert verify_credential(create_access_token({"name": "Nobody"})) is None


async def test_profile_with_bearer_header(client: AsyncClient, owner):
    response = await client.get("/user/profile", headers=auth_headers(owner))

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["userId"] == "owner-1"
    assert user["email"] == "owner@x.com"
    assert user["name"] == "Olive Owner"


async def test_profile_requires_credential(client: AsyncClient):
    response = await client.get("/user/profile")

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_expired_credential_is_unauthorized(client: AsyncClient, owner):
    token = create_access_token(owner.model_dump(by_alias=True), expires_delta=timedelta(seconds=-1))

    response = await client.get("/auth/verify", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


async def test_cookie_takes_precedence_over_header(client: AsyncClient, owner, member):
    response = await client.get(
        "/user/profile",
        headers={
            "Cookie": f"{settings.AUTH_COOKIE_NAME}={issue_credential(member)}",
            **auth_headers(owner),
        }
    )

    assert response.status_code == 200
    assert response.json()["user"]["userId"] == member.user_id


async def test_invalid_cookie_is_not_rescued_by_header(client: AsyncClient, owner):
    response = await client.get(
        "/user/profile",
        headers={
            "Cookie": f"{settings.AUTH_COOKIE_NAME}=garbage",
            **auth_headers(owner),
        }
    )

    assert response.status_code == 401


async def test_verify(client: AsyncClient, member):
    response = await client.get("/auth/verify", headers=auth_headers(member))

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["user"]["email"] == "a@x.com"


async def test_logout_clears_cookie(client: AsyncClient):
    response = await client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logged out successfully"}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.AUTH_COOKIE_NAME}=")
    assert "Max-Age=0" in set_cookie


async def test_google_login_redirects_to_consent(client: AsyncClient):
    response = await client.get("/auth/google")

    assert response.status_code == 307
    assert response.headers["location"].startswith("https://accounts.test/o/oauth2/auth")


async def test_callback_without_code(client: AsyncClient, identity_provider):
    response = await client.get("/auth/google/callback")

    assert response.status_code == 400
    assert response.json() == {"error": "Authorization code not provided."}
    assert identity_provider.codes == []


async def test_callback_sets_cookie_and_redirects(client: AsyncClient, identity_provider, member):
    response = await client.get("/auth/google/callback", params={"code": "auth-code-1"})

    assert response.status_code == 302
    assert response.headers["location"] == "http://frontend.test/profile"
    assert identity_provider.codes == ["auth-code-1"]

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.AUTH_COOKIE_NAME}=")
    assert "HttpOnly" in set_cookie
    assert "Path=/" in set_cookie
    assert f"Max-Age={7 * 24 * 60 * 60}" in set_cookie
    assert "samesite=lax" in set_cookie.lower()

    token = set_cookie.split(";", 1)[0].split("=", 1)[1]
    assert verify_credential(token) == member


async def test_callback_exchange_failure(client: AsyncClient):
    app.state.identity_provider = FakeIdentityProvider(fail=True)

    response = await client.get("/auth/google/callback", params={"code": "bad"})

    assert response.status_code == 400
    assert response.json() == {"error": "OAuth exchange failed."}
    assert "set-cookie" not in response.headers


def test_principal_accepts_camel_and_snake_names():
    by_alias = Principal.model_validate({"userId": "u1", "email": "u@x.com"})
    by_name = Principal(user_id="u1", email="u@x.com")
    assert by_alias == by_name
