"""
Auth persistence helpers.
"""

from __future__ import annotations

from core import db


def normalize_userid(userid: str) -> str:
    return (userid or "").strip()


async def get_user_by_userid(userid: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, userid, password
        FROM users
        WHERE userid = $1
        """,
        normalize_userid(userid),
    )


async def insert_user(userid: str, password_hash: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO users (userid, password)
        VALUES ($1, $2)
        RETURNING id, userid
        """,
        normalize_userid(userid),
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row
