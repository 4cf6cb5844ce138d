"""RemoteMemoService protocol and its libSQL-backed implementation."""

from __future__ import annotations

import json
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from memopad.db import connection

if TYPE_CHECKING:
    from collections.abc import AsyncIterator
    from pathlib import Path

    from memopad.db import AsyncConnection

logger = logging.getLogger(__name__)

# Never assigned to a real memo; ``delete_all_except`` keys on it.
SENTINEL_ID = "00000000-0000-0000-0000-000000000000"

_COLUMNS = ("id", "title", "content", "category", "tags", "created_at", "updated_at")

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS memos (
    id         TEXT PRIMARY KEY,
    title      TEXT NOT NULL,
    content    TEXT NOT NULL DEFAULT '',
    category   TEXT NOT NULL,
    tags       TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_SELECT = f"SELECT {', '.join(_COLUMNS)} FROM memos"


class MemoServiceError(Exception):
    """A remote memo operation failed."""


class MemoNotFoundError(MemoServiceError):
    """No remote row matches the given id."""

    def __init__(self, memo_id: str) -> None:
        super().__init__(f"No memo with id {memo_id!r}")
        self.memo_id = memo_id


@runtime_checkable
class RemoteMemoService(Protocol):
    """Contract for the relational store that owns memo rows.

    Rows are dicts shaped ``{id, title, content, category, tags, created_at,
    updated_at}``; ``tags`` may be absent or None.
    """

    async def select_all(self) -> list[dict[str, Any]]:
        """All rows, newest ``created_at`` first."""
        ...

    async def insert(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Insert title/content/category/tags. Returns the stored row."""
        ...

    async def update(self, memo_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace the mutable fields. Raises ``MemoNotFoundError`` for unknown ids."""
        ...

    async def delete(self, memo_id: str) -> int:
        """Delete one row. Returns rows removed (0 for unknown ids)."""
        ...

    async def delete_all_except(self, sentinel_id: str) -> int:
        """Delete every row whose id differs from *sentinel_id*."""
        ...


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _row_to_dict(row: tuple) -> dict[str, Any]:
    return dict(zip(_COLUMNS, row, strict=True))


class LibsqlMemoService:
    """Stores memos in a libSQL database (Turso or a local SQLite file).

    Pass an explicit *db_path* for test isolation (e.g. ``tmp_path / "test.db"``).
    Each call opens its own connection and closes it before returning.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self._db_path = db_path
        self._initialised = False

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[AsyncConnection]:
        async with connection(local_path_override=self._db_path) as db:
            if not self._initialised:
                await db.execute(_CREATE_TABLE)
                await db.commit()
                self._initialised = True
            yield db

    async def _fetch(self, db: AsyncConnection, memo_id: str) -> dict[str, Any] | None:
        cursor = await db.execute(f"{_SELECT} WHERE id = ?", (memo_id,))
        row = await cursor.fetchone()
        return _row_to_dict(row) if row else None

    # -- Read ------------------------------------------------------------------

    async def select_all(self) -> list[dict[str, Any]]:
        async with self._connect() as db:
            # rowid breaks ties between rows created within the same instant
            cursor = await db.execute(f"{_SELECT} ORDER BY created_at DESC, rowid DESC")
            rows = await cursor.fetchall()
            return [_row_to_dict(row) for row in rows]

    # -- Write -----------------------------------------------------------------

    async def insert(self, fields: dict[str, Any]) -> dict[str, Any]:
        memo_id = str(uuid.uuid4())
        now = _now()
        async with self._connect() as db:
            await db.execute(
                """
                INSERT INTO memos (id, title, content, category, tags, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    memo_id,
                    fields["title"],
                    fields.get("content", ""),
                    fields["category"],
                    json.dumps(fields.get("tags") or []),
                    now,
                    now,
                ),
            )
            await db.commit()
            logger.info("Inserted memo %s", memo_id)
            row = await self._fetch(db, memo_id)
        if row is None:
            raise MemoServiceError(f"Inserted memo {memo_id!r} could not be read back")
        return row

    async def update(self, memo_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        async with self._connect() as db:
            cursor = await db.execute(
                """
                UPDATE memos
                SET title = ?, content = ?, category = ?, tags = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    fields["title"],
                    fields.get("content", ""),
                    fields["category"],
                    json.dumps(fields.get("tags") or []),
                    _now(),
                    memo_id,
                ),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise MemoNotFoundError(memo_id)
            row = await self._fetch(db, memo_id)
        if row is None:
            raise MemoNotFoundError(memo_id)
        return row

    async def delete(self, memo_id: str) -> int:
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM memos WHERE id = ?", (memo_id,))
            await db.commit()
            return cursor.rowcount

    async def delete_all_except(self, sentinel_id: str) -> int:
        async with self._connect() as db:
            cursor = await db.execute("DELETE FROM memos WHERE id != ?", (sentinel_id,))
            await db.commit()
            logger.info("Deleted %d memos", cursor.rowcount)
            return cursor.rowcount
