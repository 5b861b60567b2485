"""
Resolution table registry.

One entry per entity kind that can appear as a self-key or foreign key.
Static configuration: the table behind each kind and the statement used to
confirm that an id exists there.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class EntityKind(str, Enum):
    ACTIVITIES = "activities"
    BUDGETS = "budgets"
    BUDGET_POSTS = "budget_posts"
    BUDGET_CAPS = "budget_caps"
    BUDGET_DETAILS = "budget_details"
    BUDGET_DETAILS_POSTS = "budget_details_posts"
    BUDGET_DETAILS_POSTS_RECOMMENDATIONS = "budget_details_posts_recommendations"
    FUND_REQUESTS = "fund_requests"
    FUND_REQUEST_DETAILS = "fund_request_details"


@dataclass(frozen=True)
class ResolutionTable:
    kind: EntityKind
    table: str

    @property
    def lookup_sql(self) -> str:
        return f"SELECT id FROM {self.table} WHERE id = $1"

    def probe_sql(self, placeholder: int) -> str:
        """
        One branch of a batched existence probe; rows are tagged with the kind.
        """
        return f"SELECT '{self.kind.value}'::text AS kind, id FROM {self.table} WHERE id = ${placeholder}"


RESOLUTION_TABLES: Mapping[EntityKind, ResolutionTable] = MappingProxyType(
    {kind: ResolutionTable(kind=kind, table=kind.value) for kind in EntityKind}
)


def table_for(kind: EntityKind) -> ResolutionTable:
    return RESOLUTION_TABLES[EntityKind(kind)]
