"""
Authentication API endpoints.
Google OAuth login, credential cookie, logout and verification.
"""
from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from pixshare.api.deps import get_current_principal, get_identity_provider
from pixshare.core.config import settings
from pixshare.core.exceptions import ValidationFailed
from pixshare.core.security import issue_credential
from pixshare.schemas.auth import MessageResponse, Principal, ProfileResponse, VerifyResponse
from pixshare.services.google_oauth import IdentityProvider


router = APIRouter()


@router.get("/auth/google")
async def google_login(provider: IdentityProvider = Depends(get_identity_provider)):
    """Redirect to the Google consent screen."""
    return RedirectResponse(url=provider.authorization_url())


@router.get("/auth/google/callback")
async def google_callback(
    code: Optional[str] = None,
    provider: IdentityProvider = Depends(get_identity_provider)
):
    """
    Exchange the authorization code, set the credential cookie and send the
    browser to the frontend profile page.
    """
    if not code:
        raise ValidationFailed("Authorization code not provided.")

    principal = await provider.exchange_code(code)
    token = issue_credential(principal)

    response = RedirectResponse(
        url=f"{settings.frontend_base_url}/profile",
        status_code=status.HTTP_302_FOUND
    )
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=int(settings.credential_ttl.total_seconds()),
        path="/",
    )
    return response


@router.get("/user/profile", response_model=ProfileResponse)
async def get_profile(principal: Principal = Depends(get_current_principal)):
    return ProfileResponse(user=principal)


@router.post("/auth/logout", response_model=MessageResponse)
async def logout():
    response = JSONResponse(content={"message": "Logged out successfully"})
    response.delete_cookie(settings.AUTH_COOKIE_NAME, path="/")
    return response


@router.get("/auth/verify", response_model=VerifyResponse)
async def verify(principal: Principal = Depends(get_current_principal)):
    return VerifyResponse(valid=True, user=principal)
