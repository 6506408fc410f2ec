from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from sqlany_schema.database.connection import Connection  # noqa: E402


class FakeConnection(Connection):
    """Records every query and statement; answers queries from canned rows.

    ``responses`` maps a SQL text to either a list of rows or a callable
    taking the bound parameters and returning rows. Unknown queries return
    no rows.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.queries: list[tuple[str, str, dict]] = []
        self.executed: list[str] = []

    def query(self, sql, tag, params=None):
        params = dict(params or {})
        self.queries.append((sql, tag, params))
        rows = self.responses.get(sql, [])
        if callable(rows):
            rows = rows(params)
        return [dict(row) for row in rows]

    def execute(self, sql, params=None):
        self.executed.append(sql)


@pytest.fixture
def fake_connection():
    return FakeConnection()
