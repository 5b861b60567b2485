"""
Router factory: the five CRUD endpoints (plus flag toggles) for one entity.
"""

# No `from __future__ import annotations` here: FastAPI has to see the concrete
# payload classes bound inside `build_router`.

from fastapi import APIRouter, Depends, Request

from auth import dependencies as auth_dependencies
from core import envelope

from . import service
from .metadata import EntityMeta, FlagRoute


def build_router(meta: EntityMeta) -> APIRouter:
    router = APIRouter(
        prefix=meta.prefix,
        tags=[meta.tag],
        dependencies=[
            Depends(envelope.capture_request),
            Depends(auth_dependencies.get_current_user),
        ],
    )
    schema = meta.schema

    @router.get("", name=f"list_{meta.kind.value}")
    async def list_rows(request: Request) -> dict:
        rows = await service.list_all(meta)
        return envelope.success(request, rows)

    @router.post("", name=f"create_{meta.kind.value}")
    async def create_row(request: Request, payload: schema) -> dict:
        row = await service.create(meta, payload)
        return envelope.success(request, row)

    @router.get("/{row_id}", name=f"get_{meta.kind.value}")
    async def get_row(request: Request, row_id: int) -> dict:
        row = await service.get_by_id(meta, row_id)
        return envelope.success(request, row)

    @router.put("/{row_id}", name=f"update_{meta.kind.value}")
    async def update_row(request: Request, row_id: int, payload: schema) -> dict:
        row = await service.update(meta, row_id, payload)
        return envelope.success(request, row)

    @router.delete("/{row_id}", name=f"delete_{meta.kind.value}")
    async def delete_row(request: Request, row_id: int) -> dict:
        row = await service.delete(meta, row_id)
        return envelope.success(request, row)

    for flag in meta.flags:
        _add_flag_route(router, meta, flag)

    return router


def _add_flag_route(router: APIRouter, meta: EntityMeta, flag: FlagRoute) -> None:
    schema = flag.schema

    @router.put(f"/{flag.path}/{{row_id}}", name=f"set_{meta.kind.value}_{flag.column}")
    async def set_flag(request: Request, row_id: int, payload: schema) -> dict:
        row = await service.set_flag(meta, row_id, flag.column, bool(getattr(payload, flag.column)))
        return envelope.success(request, row)
