"""
Auth dependencies for protected FastAPI routes.

The `Authorization` header carries the access token, with or without a
`Bearer ` prefix.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from . import service


def token_from_header(authorization: str | None) -> str:
    parts = (authorization or "").split(None, 1)
    if parts and parts[0].lower() == "bearer":
        parts = parts[1:]
    raw = parts[0].strip() if parts else ""
    if not raw:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authorization required")
    return raw


async def get_access_token(authorization: str | None = Header(default=None)) -> str:
    return token_from_header(authorization)


async def get_current_user(access_token: str = Depends(get_access_token)) -> dict:
    """Claims of the caller's token; a valid signature is the only requirement."""
    return service.claims_from_access_token(access_token)
