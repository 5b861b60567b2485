"""
Entity metadata consumed by the generic repository, service and router.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from integrity.registry import EntityKind, table_for


@dataclass(frozen=True)
class ForeignKey:
    column: str
    kind: EntityKind
    message: str


@dataclass(frozen=True)
class FlagRoute:
    """
    `PUT {prefix}/{path}/{id}` that flips a single boolean column.
    """

    path: str
    column: str
    schema: type[BaseModel]


@dataclass(frozen=True)
class EntityMeta:
    kind: EntityKind
    prefix: str
    tag: str
    columns: tuple[str, ...]
    schema: type[BaseModel]
    not_found_message: str
    foreign_keys: tuple[ForeignKey, ...] = ()
    unique_column: str | None = None
    flags: tuple[FlagRoute, ...] = ()

    @property
    def table(self) -> str:
        return table_for(self.kind).table

    @property
    def select_columns(self) -> tuple[str, ...]:
        return ("id", *self.columns, "created_at", "updated_at")

    def foreign_messages(self) -> dict[EntityKind, str]:
        return {fk.kind: fk.message for fk in self.foreign_keys}

    def values(self, payload: BaseModel) -> dict[str, Any]:
        return {column: getattr(payload, column) for column in self.columns}
