"""Memo data models and row mapping."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

# Ordered category value -> display label
MEMO_CATEGORIES: dict[str, str] = {
    "personal": "Personal",
    "work": "Work",
    "study": "Study",
    "idea": "Idea",
    "other": "Other",
}

DEFAULT_CATEGORY = "personal"


def category_label(category: str) -> str:
    """Return the display label for *category*, or the value itself if unknown."""
    return MEMO_CATEGORIES.get(category, category)


def _parse_tags(row: dict[str, Any]) -> list[str]:
    """Tags from a row. libsql stores them as a JSON array; bad values map to []."""
    tags = row.get("tags")
    if isinstance(tags, str):
        if not tags:
            return []
        try:
            tags = json.loads(tags)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed tags on memo %s: %r", row.get("id"), tags)
            return []
    if not isinstance(tags, list | tuple):
        if tags is not None:
            logger.warning("Ignoring non-list tags on memo %s: %r", row.get("id"), tags)
        return []
    return [str(tag) for tag in tags]


class MemoFormData(BaseModel):
    """Fields a caller supplies to create or replace a memo.

    The category is deliberately not checked against ``MEMO_CATEGORIES``;
    unknown values are stored and shown verbatim.
    """

    title: str = Field(min_length=1)
    content: str = ""
    category: str = DEFAULT_CATEGORY
    tags: list[str] = Field(default_factory=list)

    def to_fields(self) -> dict[str, Any]:
        """The four mutable columns, in insert/update form."""
        return {
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "tags": list(self.tags),
        }


class Memo(BaseModel):
    """A memo as stored remotely and cached by ``MemoStore``."""

    id: str
    title: str
    content: str = ""
    category: str = DEFAULT_CATEGORY
    tags: list[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @property
    def category_label(self) -> str:
        return category_label(self.category)

    def to_form(self) -> MemoFormData:
        """Editable fields of this memo, e.g. to prefill an edit form."""
        return MemoFormData(
            title=self.title,
            content=self.content,
            category=self.category,
            tags=list(self.tags),
        )

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Memo:
        """Map a remote row to a Memo. Absent or null tags become ``[]``."""
        return cls(
            id=str(row["id"]),
            title=row["title"],
            content=row.get("content") or "",
            category=row.get("category") or "",
            tags=_parse_tags(row),
            created_at=row.get("created_at") or "",
            updated_at=row.get("updated_at") or "",
        )


class MemoStats(BaseModel):
    """Aggregate counts over the memo collection."""

    total: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    filtered: int = 0
