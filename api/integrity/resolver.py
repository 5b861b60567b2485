"""
Referential-integrity resolution.

A `KeyDescriptor` carries the candidate ids one request wants verified,
keyed by entity kind. `resolve()` checks every candidate against its table and
returns a `Resolution` that reports each kind as absent, found or not found.

Not found is ordinary output, not an error. Database failures propagate
unchanged; a resolution is never returned after one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from . import repository
from .registry import EntityKind

logger = logging.getLogger(__name__)


class Status(str, Enum):
    ABSENT = "absent"
    FOUND = "found"
    NOT_FOUND = "not_found"


def _candidate_id(kind: EntityKind, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{kind.value} id must be an int, got {type(value).__name__}.")
    return value


def _positive_ids(ids: Mapping[EntityKind | str, int | None]) -> dict[EntityKind, int]:
    # Zero, negative and None all mean "not supplied".
    positive: dict[EntityKind, int] = {}
    for kind, value in ids.items():
        kind = EntityKind(kind)
        candidate = _candidate_id(kind, value)
        if candidate is not None and candidate > 0:
            positive[kind] = candidate
    return positive


@dataclass(frozen=True)
class KeyDescriptor:
    ids: Mapping[EntityKind, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "ids", MappingProxyType(_positive_ids(self.ids)))

    @classmethod
    def from_fields(cls, **ids: int | None) -> KeyDescriptor:
        """
        Build from keyword ids named after the kinds, e.g.
        `KeyDescriptor.from_fields(budgets=7, budget_posts=42)`.
        """
        return cls(_positive_ids(ids))

    def candidate(self, kind: EntityKind) -> int | None:
        return self.ids.get(EntityKind(kind))

    def __len__(self) -> int:
        return len(self.ids)


@dataclass(frozen=True)
class Resolution:
    requested: Mapping[EntityKind, int]
    found: Mapping[EntityKind, int]

    def status(self, kind: EntityKind) -> Status:
        kind = EntityKind(kind)
        if kind not in self.requested:
            return Status.ABSENT
        if kind in self.found:
            return Status.FOUND
        return Status.NOT_FOUND

    def resolved_id(self, kind: EntityKind) -> int | None:
        """
        Confirmed id, 0 when the candidate did not resolve, None when absent.
        """
        status = self.status(kind)
        if status is Status.ABSENT:
            return None
        if status is Status.NOT_FOUND:
            return 0
        return self.found[EntityKind(kind)]

    def resolved_ids(self) -> dict[EntityKind, int]:
        return {kind: self.found.get(kind, 0) for kind in self.requested}

    def missing(self) -> list[EntityKind]:
        return [kind for kind in self.requested if kind not in self.found]

    @property
    def all_found(self) -> bool:
        return not self.missing()


async def resolve(descriptor: KeyDescriptor) -> Resolution:
    requested = dict(descriptor.ids)
    if not requested:
        return Resolution(requested=MappingProxyType({}), found=MappingProxyType({}))

    if len(requested) == 1:
        [(kind, candidate_id)] = requested.items()
        confirmed = await repository.existing_id(kind, candidate_id)
        found = {} if confirmed is None else {kind: confirmed}
    else:
        found = await repository.existing_ids(requested)

    found = {kind: found_id for kind, found_id in found.items() if kind in requested}
    resolution = Resolution(requested=MappingProxyType(requested), found=MappingProxyType(found))
    if not resolution.all_found:
        logger.debug(
            "references_unresolved missing=%s",
            ",".join(kind.value for kind in resolution.missing()),
        )
    return resolution
