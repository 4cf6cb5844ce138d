"""Pure derivations over a memo collection: filtered view and stats."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from memopad.memos.models import ALL_CATEGORIES, MemoStats

if TYPE_CHECKING:
    from collections.abc import Sequence

    from memopad.memos.models import Memo


def matches_query(memo: Memo, query: str) -> bool:
    """True if the lowercased *query* occurs in the title, content, or any tag."""
    needle = query.lower()
    return (
        needle in memo.title.lower()
        or needle in memo.content.lower()
        or any(needle in tag.lower() for tag in memo.tags)
    )


def filter_memos(
    memos: Sequence[Memo],
    query: str = "",
    category: str = ALL_CATEGORIES,
) -> list[Memo]:
    """Return the memos matching both *category* and *query*, in input order.

    ``category == "all"`` and a blank *query* each disable their filter.
    The input sequence is never modified.
    """
    filtered = list(memos)

    if category != ALL_CATEGORIES:
        filtered = [memo for memo in filtered if memo.category == category]

    if query.strip():
        filtered = [memo for memo in filtered if matches_query(memo, query)]

    return filtered


def compute_stats(memos: Sequence[Memo], filtered: Sequence[Memo]) -> MemoStats:
    """Totals over the full collection plus the size of the filtered view."""
    return MemoStats(
        total=len(memos),
        by_category=dict(Counter(memo.category for memo in memos)),
        filtered=len(filtered),
    )
