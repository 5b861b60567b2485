"""
Budgeting API endpoints: one CRUD router per table.
"""

from __future__ import annotations

from fastapi import APIRouter

from crud.router import build_router

from . import entities

routers: list[APIRouter] = [build_router(meta) for meta in entities.ALL]
