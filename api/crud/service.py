"""
Generic "validate references, then mutate" pipeline.

Every entity goes through the same steps:
1) payload already field-validated by its pydantic schema
2) referential check (self and/or foreign keys, see `integrity.service`)
3) unique-name check where the entity has one
4) one SQL statement
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import status
from pydantic import BaseModel

from core.envelope import ApiError
from integrity import service as integrity_service
from integrity.resolver import KeyDescriptor

from . import repository
from .metadata import EntityMeta

logger = logging.getLogger(__name__)


def build_descriptor(meta: EntityMeta, *, row_id: int | None, values: dict[str, Any] | None) -> KeyDescriptor:
    ids: dict = {}
    if row_id is not None:
        ids[meta.kind] = row_id
    if values is not None:
        for fk in meta.foreign_keys:
            ids[fk.kind] = values.get(fk.column)
    return KeyDescriptor(ids)


async def _check_references(
    meta: EntityMeta,
    *,
    row_id: int | None,
    values: dict[str, Any] | None,
    validate_self_id: bool,
    check_self_only: bool,
) -> None:
    await integrity_service.check_references(
        build_descriptor(meta, row_id=row_id, values=values),
        self_kind=meta.kind,
        self_message=meta.not_found_message,
        foreign=meta.foreign_messages(),
        validate_self_id=validate_self_id,
        check_self_only=check_self_only,
    )


async def _ensure_unique(meta: EntityMeta, values: dict[str, Any], *, row_id: int | None) -> None:
    if meta.unique_column is None:
        return None
    existing = await repository.get_row_by_column(meta, meta.unique_column, values[meta.unique_column])
    if existing is not None and int(existing["id"]) != row_id:
        raise ApiError(status.HTTP_409_CONFLICT, "name already in use")


def _vanished(meta: EntityMeta, row_id: int) -> ApiError:
    # The row passed the self-check but was gone by the time we wrote.
    logger.warning("row_vanished table=%s id=%s", meta.table, row_id)
    return ApiError(status.HTTP_404_NOT_FOUND, meta.not_found_message)


async def list_all(meta: EntityMeta) -> list[dict]:
    return await repository.list_rows(meta)


async def get_by_id(meta: EntityMeta, row_id: int) -> dict | None:
    return await repository.get_row(meta, row_id)


async def create(meta: EntityMeta, payload: BaseModel) -> dict:
    values = meta.values(payload)
    await _check_references(meta, row_id=None, values=values, validate_self_id=False, check_self_only=False)
    await _ensure_unique(meta, values, row_id=None)
    return await repository.insert_row(meta, values)


async def update(meta: EntityMeta, row_id: int, payload: BaseModel) -> dict:
    values = meta.values(payload)
    await _check_references(meta, row_id=row_id, values=values, validate_self_id=True, check_self_only=False)
    await _ensure_unique(meta, values, row_id=row_id)
    row = await repository.update_row(meta, row_id, values)
    if row is None:
        raise _vanished(meta, row_id)
    return row


async def delete(meta: EntityMeta, row_id: int) -> dict:
    await _check_references(meta, row_id=row_id, values=None, validate_self_id=True, check_self_only=True)
    row = await repository.delete_row(meta, row_id)
    if row is None:
        raise _vanished(meta, row_id)
    return row


async def set_flag(meta: EntityMeta, row_id: int, column: str, value: bool) -> dict:
    if column not in meta.columns:
        raise ValueError(f"{column} is not a column of {meta.table}.")
    await _check_references(meta, row_id=row_id, values=None, validate_self_id=True, check_self_only=True)
    row = await repository.update_row(meta, row_id, {column: value})
    if row is None:
        raise _vanished(meta, row_id)
    return row
