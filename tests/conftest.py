"""Shared test fixtures."""

from __future__ import annotations

import itertools
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from memopad.memos.service import MemoNotFoundError


class FakeMemoService:
    """In-memory RemoteMemoService with store-assigned ids and timestamps."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows: list[dict[str, Any]] = list(rows or [])
        self.calls: list[str] = []
        self._ids = itertools.count(1)
        self._clock = datetime(2025, 1, 1, tzinfo=UTC)

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    async def select_all(self) -> list[dict[str, Any]]:
        self.calls.append("select_all")
        return sorted(
            (dict(row) for row in self.rows),
            key=lambda row: row["created_at"],
            reverse=True,
        )

    async def insert(self, fields: dict[str, Any]) -> dict[str, Any]:
        self.calls.append("insert")
        now = self._tick()
        row = {"id": f"memo-{next(self._ids)}", **fields, "created_at": now, "updated_at": now}
        self.rows.append(row)
        return dict(row)

    async def update(self, memo_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        self.calls.append("update")
        for row in self.rows:
            if row["id"] == memo_id:
                row.update(fields, updated_at=self._tick())
                return dict(row)
        raise MemoNotFoundError(memo_id)

    async def delete(self, memo_id: str) -> int:
        self.calls.append("delete")
        before = len(self.rows)
        self.rows = [row for row in self.rows if row["id"] != memo_id]
        return before - len(self.rows)

    async def delete_all_except(self, sentinel_id: str) -> int:
        self.calls.append("delete_all_except")
        before = len(self.rows)
        self.rows = [row for row in self.rows if row["id"] == sentinel_id]
        return before - len(self.rows)


@pytest.fixture
def fake_service() -> FakeMemoService:
    """An empty in-memory memo service."""
    return FakeMemoService()


@pytest.fixture(autouse=False)
def _no_turso(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure tests use local file, not remote Turso."""
    monkeypatch.setattr("memopad.config.settings.turso_database_url", "")
