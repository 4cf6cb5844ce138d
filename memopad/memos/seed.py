"""SeedBootstrapper — fills an empty memo store with example memos."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from memopad.memos.models import MemoFormData

if TYPE_CHECKING:
    from memopad.memos.service import RemoteMemoService

logger = logging.getLogger(__name__)

# Inserted oldest first, so the first entry ends up last in the newest-first list.
SAMPLE_MEMOS: tuple[MemoFormData, ...] = (
    MemoFormData(
        title="Welcome to memopad",
        content=(
            "Memos hold a title, **markdown** content, a category and tags.\n\n"
            "- Search matches titles, content and tags\n"
            "- Filter by category to narrow the list"
        ),
        category="other",
        tags=["welcome", "guide"],
    ),
    MemoFormData(
        title="Weekend groceries",
        content="Eggs, oat milk, spinach, coffee beans, sourdough.",
        category="personal",
        tags=["shopping", "weekend"],
    ),
    MemoFormData(
        title="Meeting notes: Q3 planning",
        content=(
            "## Agenda\n"
            "1. Review Q2 results\n"
            "2. Agree on Q3 goals\n\n"
            "Action item: circulate the draft roadmap by Friday."
        ),
        category="work",
        tags=["meeting", "q3", "planning"],
    ),
    MemoFormData(
        title="Code review checklist",
        content="Tests pass, names are clear, errors are logged, no dead code.",
        category="work",
        tags=["review", "checklist"],
    ),
    MemoFormData(
        title="Python async study notes",
        content=(
            "`await` suspends the current coroutine without blocking the loop.\n"
            "Use `asyncio.to_thread()` for blocking drivers."
        ),
        category="study",
        tags=["python", "asyncio"],
    ),
    MemoFormData(
        title="App idea: habit tracker",
        content="Daily check-ins, streaks, and a weekly summary.",
        category="idea",
        tags=["app", "habits"],
    ),
    MemoFormData(
        title="Side project: recipe finder",
        content="Search recipes by what is already in the fridge.",
        category="idea",
        tags=["app", "cooking"],
    ),
)


class SeedBootstrapper:
    """Inserts ``SAMPLE_MEMOS`` into a store that is observed to be empty."""

    def __init__(
        self,
        service: RemoteMemoService,
        samples: tuple[MemoFormData, ...] = SAMPLE_MEMOS,
    ) -> None:
        self._service = service
        self._samples = samples

    async def ensure_sample_data(self) -> int:
        """Seed the store if it has no rows. Returns the number of rows inserted.

        Emptiness is re-checked right before inserting, so a store populated
        since the caller's read is left alone.  Two callers racing past the
        check can still both seed; that only duplicates sample rows.
        """
        existing = await self._service.select_all()
        if existing:
            logger.debug("Store already has %d memos; skipping seed", len(existing))
            return 0

        for sample in self._samples:
            await self._service.insert(sample.to_fields())

        logger.info("Seeded %d sample memos", len(self._samples))
        return len(self._samples)
