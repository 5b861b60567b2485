"""
Existence lookups (raw SQL, read-only).
"""

from __future__ import annotations

from typing import Mapping

from core import db

from .registry import EntityKind, table_for


async def existing_id(kind: EntityKind, candidate_id: int) -> int | None:
    row = await db.fetch_one(table_for(kind).lookup_sql, candidate_id)
    if row is None:
        return None
    return int(row["id"])


async def existing_ids(candidates: Mapping[EntityKind, int]) -> dict[EntityKind, int]:
    """
    Probe every candidate in one round trip.

    Each kind contributes at most one row (ids are primary keys), so the
    result maps a kind to its confirmed id; kinds without a row are missing.
    """
    if not candidates:
        return {}

    branches: list[str] = []
    args: list[int] = []
    for position, (kind, candidate_id) in enumerate(candidates.items(), start=1):
        branches.append(table_for(kind).probe_sql(position))
        args.append(int(candidate_id))

    rows = await db.fetch_all("\nUNION ALL\n".join(branches), *args)
    return {EntityKind(row["kind"]): int(row["id"]) for row in rows}
