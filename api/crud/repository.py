"""
Generic row persistence (raw SQL).

Table and column names come from static `EntityMeta`, never from requests;
values are always bound as positional parameters.
"""

from __future__ import annotations

from typing import Any, Mapping

from core import db

from .metadata import EntityMeta


def _select_list(meta: EntityMeta) -> str:
    return ", ".join(meta.select_columns)


async def list_rows(meta: EntityMeta) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_select_list(meta)}
        FROM {meta.table}
        ORDER BY id ASC
        """
    )


async def get_row(meta: EntityMeta, row_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_select_list(meta)}
        FROM {meta.table}
        WHERE id = $1
        """,
        row_id,
    )


async def get_row_by_column(meta: EntityMeta, column: str, value: Any) -> dict | None:
    if column not in meta.columns:
        raise ValueError(f"{column} is not a column of {meta.table}.")
    return await db.fetch_one(
        f"""
        SELECT {_select_list(meta)}
        FROM {meta.table}
        WHERE {column} = $1
        LIMIT 1
        """,
        value,
    )


async def insert_row(meta: EntityMeta, values: Mapping[str, Any]) -> dict:
    columns = list(values)
    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
    row = await db.fetch_one(
        f"""
        INSERT INTO {meta.table} ({", ".join(columns)}, created_at, updated_at)
        VALUES ({placeholders}, now(), now())
        RETURNING {_select_list(meta)}
        """,
        *values.values(),
    )
    if row is None:
        raise RuntimeError(f"Failed to insert into {meta.table}.")
    return row


async def update_row(meta: EntityMeta, row_id: int, values: Mapping[str, Any]) -> dict | None:
    columns = list(values)
    assignments = ", ".join(f"{column} = ${i}" for i, column in enumerate(columns, start=1))
    return await db.fetch_one(
        f"""
        UPDATE {meta.table}
        SET {assignments}, updated_at = now()
        WHERE id = ${len(columns) + 1}
        RETURNING {_select_list(meta)}
        """,
        *values.values(),
        row_id,
    )


async def delete_row(meta: EntityMeta, row_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        DELETE FROM {meta.table}
        WHERE id = $1
        RETURNING {_select_list(meta)}
        """,
        row_id,
    )
