"""
Google OAuth code exchange.

Two outbound calls per login: the authorization code is traded for an access
token, then the access token is used to fetch the profile. Either failure
surfaces as ``IdentityExchangeError``; nothing is retried.
"""
import logging
from typing import Optional, Protocol
from urllib.parse import urlencode

import httpx

from pixshare.core.config import Settings, settings as default_settings
from pixshare.core.exceptions import IdentityExchangeError
from pixshare.schemas.auth import Principal

logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    def authorization_url(self) -> str:
        ...

    async def exchange_code(self, code: str) -> Principal:
        ...


class GoogleOAuthClient:
    """Implements IdentityProvider against Google's OAuth 2.0 endpoints."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Optional[Settings] = None):
        self.http = http_client
        self.settings = settings or default_settings

    def authorization_url(self) -> str:
        params = {
            "client_id": self.settings.GOOGLE_CLIENT_ID,
            "redirect_uri": self.settings.google_redirect_uri,
            "response_type": "code",
            "scope": "profile email",
        }
        return f"{self.settings.GOOGLE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> Principal:
        try:
            # 1. Authorization code -> access token
            token_response = await self.http.post(
                self.settings.GOOGLE_TOKEN_URL,
                data={
                    "client_id": self.settings.GOOGLE_CLIENT_ID,
                    "client_secret": self.settings.GOOGLE_CLIENT_SECRET,
                    "code": code,
                    "grant_type": "authorization_code",
                    "redirect_uri": self.settings.google_redirect_uri,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
            token_response.raise_for_status()
            access_token = token_response.json().get("access_token")
            if not access_token:
                logger.error("Google token response did not include an access token")
                raise IdentityExchangeError()

            # 2. Access token -> profile
            user_response = await self.http.get(
                self.settings.GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            user_response.raise_for_status()
            profile = user_response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Google OAuth exchange failed: {e.response.status_code} {e.response.text}"
            )
            raise IdentityExchangeError() from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Google OAuth exchange failed: {e}")
            raise IdentityExchangeError() from e

        if not profile.get("id") or not profile.get("email"):
            logger.error("Google profile response is missing id or email")
            raise IdentityExchangeError()

        principal = Principal(
            user_id=str(profile["id"]),
            email=profile["email"],
            name=profile.get("name") or "",
            picture=profile.get("picture") or "",
        )
        logger.info(f"User authenticated: {principal.email} ({principal.user_id})")
        return principal
