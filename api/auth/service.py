"""
Auth business logic.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status

from . import repository, schemas, security

logger = logging.getLogger(__name__)


async def login(payload: schemas.LoginRequest) -> str:
    """
    Verify credentials and return a signed access token.
    """
    user_row = await repository.get_user_by_userid(payload.userid)
    is_valid = user_row is not None and security.verify_password(
        payload.password,
        str(user_row.get("password") or ""),
    )
    if not is_valid:
        # Same answer for unknown user and wrong password.
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="user not found",
        )

    logger.info("user_login userid=%s", user_row["userid"])
    return security.build_access_token(
        user_id=int(user_row["id"]),
        userid=str(user_row["userid"]),
    )


async def create_user(userid: str, password: str) -> dict:
    """
    Provision a login. Used by the `budget-users` command; the API has no
    sign-up route.
    """
    if await repository.get_user_by_userid(userid) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="userid already in use",
        )

    user_row = await repository.insert_user(userid, security.hash_password(password))
    logger.info("user_created userid=%s", user_row["userid"])
    return user_row


def claims_from_access_token(access_token: str) -> dict:
    try:
        return security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
