"""
Signed bearer credential: issue and verify.

The credential is a JWT carrying the principal's identity claims. Validity is
signature plus expiry only; there is no revocation list.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from pixshare.core.config import settings
from pixshare.schemas.auth import Principal


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign ``data`` with an ``exp`` of now + ``expires_delta`` (default 7 days)."""
    now = datetime.now(timezone.utc)
    to_encode = data.copy()
    to_encode.update({
        "iat": int(now.timestamp()),
        "exp": int((now + (expires_delta or settings.credential_ttl)).timestamp()),
    })
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the claims, or None when the signature is bad or the token expired."""
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def issue_credential(principal: Principal) -> str:
    return create_access_token(principal.model_dump(by_alias=True))


def verify_credential(token: str) -> Optional[Principal]:
    payload = decode_token(token)
    if not payload or not payload.get("userId") or not payload.get("email"):
        return None
    return Principal.model_validate(payload)
