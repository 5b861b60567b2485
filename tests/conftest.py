"""Shared fixtures for tests.

Nothing here needs PostgreSQL: `core.db` query helpers are swapped for an
in-memory fake that understands the existence probes issued by
`integrity.repository`.
"""

import re

import pytest

from core import db

LOOKUP_RE = re.compile(r"SELECT id FROM (\w+) WHERE id = \$1")
PROBE_RE = re.compile(r"SELECT '(\w+)'::text AS kind, id FROM (\w+) WHERE id = \$(\d+)")


class FakeExistenceDb:
    """Tables are plain `{table: {id, ...}}` sets."""

    def __init__(self, tables: dict[str, set[int]] | None = None):
        self.tables = tables or {}
        self.calls: list[tuple[str, tuple]] = []
        self.fail_on: str | None = None

    def _check_connection(self, table: str) -> None:
        if table == self.fail_on:
            raise ConnectionResetError("connection to server was lost")

    async def fetch_one(self, sql: str, *args):
        self.calls.append((sql, args))
        match = LOOKUP_RE.search(sql)
        assert match, f"unexpected query: {sql}"
        table = match.group(1)
        self._check_connection(table)
        if args[0] in self.tables.get(table, set()):
            return {"id": args[0]}
        return None

    async def fetch_all(self, sql: str, *args):
        self.calls.append((sql, args))
        branches = PROBE_RE.findall(sql)
        assert branches, f"unexpected query: {sql}"
        rows = []
        for kind, table, position in branches:
            self._check_connection(table)
            candidate = args[int(position) - 1]
            if candidate in self.tables.get(table, set()):
                rows.append({"kind": kind, "id": candidate})
        return rows


@pytest.fixture
def fake_db(monkeypatch) -> FakeExistenceDb:
    """Existence-only database with a few rows in every referenced table."""
    fake = FakeExistenceDb(
        {
            "activities": {1, 2},
            "budgets": {7},
            "budget_posts": {3},
            "budget_caps": {11},
            "budget_details": {21},
            "budget_details_posts": {31},
            "budget_details_posts_recommendations": {41},
            "fund_requests": {51},
            "fund_request_details": {61},
        }
    )
    monkeypatch.setattr(db, "fetch_one", fake.fetch_one)
    monkeypatch.setattr(db, "fetch_all", fake.fetch_all)
    return fake


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "budget-api-test-secret-" + "0123456789abcdef" * 4)
    monkeypatch.delenv("JWT_ALG", raising=False)
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MIN", raising=False)
