"""
`budget-users` command: provision logins for the API.

Reads DATABASE_URL (and the DB_POOL_* settings) like the API process.
"""

from __future__ import annotations

import asyncio

import click
from fastapi import HTTPException

from core import db

from . import security, service


async def _create_user(userid: str, password: str) -> dict:
    await db.init_pool()
    try:
        return await service.create_user(userid, password)
    finally:
        await db.close_pool()


@click.group()
def cli():
    """Manage API users."""


@cli.command("create")
@click.argument("userid")
@click.password_option("--password", help="Password for the new user (prompted when omitted).")
def create_cmd(userid: str, password: str):
    """Create USERID with a bcrypt-hashed password."""
    try:
        row = asyncio.run(_create_user(userid, password))
    except HTTPException as exc:
        raise click.ClickException(str(exc.detail)) from exc
    except security.AuthSecurityError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {row['userid']} (id {row['id']})")


__all__ = ["cli"]
