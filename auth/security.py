"""
Educator authentication.

The frontend signs in with Google and sends the OAuth access token as a
Bearer token. We verify it against Google's tokeninfo endpoint and keep the
token itself so Docs/Drive/Gmail calls run as the educator.
"""

import logging
from typing import Optional

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

log = logging.getLogger(__name__)

TOKENINFO_URL = "https://www.googleapis.com/oauth2/v3/tokeninfo"

_bearer = HTTPBearer(auto_error=False)


class GoogleUser(BaseModel):
    email: str
    access_token: str


# ─── Token helpers ─────────────────────────────────────────────────────────────

async def verify_google_token(
    token: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[GoogleUser]:
    """Ask Google who owns `token`. Returns None if the token is invalid or expired."""
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=10.0) as own_client:
                response = await own_client.get(TOKENINFO_URL, params={"access_token": token})
        else:
            response = await client.get(TOKENINFO_URL, params={"access_token": token})
    except httpx.HTTPError as e:
        log.error(f"[AUTH] tokeninfo request failed: {e}")
        return None

    if not response.is_success:
        return None
    email = response.json().get("email")
    if not email:
        log.error("[AUTH] Invalid token response from Google (no email)")
        return None
    return GoogleUser(email=email, access_token=token)


# ─── Auth dependency ──────────────────────────────────────────────────────────

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> GoogleUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = await verify_google_token(credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Invalid or expired token",
        )
    return user
