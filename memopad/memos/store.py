"""MemoStore — in-session memo collection kept in sync with the remote store.

All mutations go to the remote service first; local state only changes after
the service confirms.  Failures are logged and absorbed so callers always
have a usable (possibly stale or empty) collection.

Search and category criteria never reach the remote service.  The filtered
view and stats are derived locally and cached until the collection, the
query, or the category changes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from memopad.config import settings
from memopad.memos.models import ALL_CATEGORIES, Memo, MemoStats
from memopad.memos.seed import SeedBootstrapper
from memopad.memos.service import SENTINEL_ID, MemoNotFoundError
from memopad.memos.views import compute_stats, filter_memos

if TYPE_CHECKING:
    from memopad.memos.models import MemoFormData
    from memopad.memos.service import RemoteMemoService

logger = logging.getLogger(__name__)


class MemoStore:
    """Owns the memo collection for one session.

    Build one per session and hand it to whatever needs it::

        store = MemoStore(LibsqlMemoService())
        await store.load()

    When *seeder* is omitted, a ``SeedBootstrapper`` over the same service is
    used.  *seed* turns first-run seeding on or off.  It defaults to on when a
    *seeder* is passed, and to the ``SEED_SAMPLE_DATA`` setting otherwise.
    """

    def __init__(
        self,
        service: RemoteMemoService,
        seeder: SeedBootstrapper | None = None,
        *,
        seed: bool | None = None,
    ) -> None:
        self._service = service
        if seed is None:
            seed = seeder is not None or settings.seed_sample_data
        if seed and seeder is None:
            seeder = SeedBootstrapper(service)
        self._seeder = seeder if seed else None

        self._memos: list[Memo] = []
        self._loading = False
        self._search_query = ""
        self._selected_category = ALL_CATEGORIES

        # Bumped on every change to _memos; part of the view cache key.
        self._version = 0
        self._view_key: tuple[int, str, str] | None = None
        self._filtered: list[Memo] = []
        self._stats = MemoStats()

    # -- Read model ------------------------------------------------------------

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def selected_category(self) -> str:
        return self._selected_category

    @property
    def all_memos(self) -> list[Memo]:
        """The full collection, newest first."""
        return list(self._memos)

    @property
    def filtered_memos(self) -> list[Memo]:
        """The collection restricted to the current category and query."""
        self._refresh_view()
        return list(self._filtered)

    @property
    def stats(self) -> MemoStats:
        self._refresh_view()
        return self._stats.model_copy(deep=True)

    def get_memo_by_id(self, memo_id: str) -> Memo | None:
        """Return the cached memo with *memo_id*, or None."""
        for memo in self._memos:
            if memo.id == memo_id:
                return memo
        return None

    # -- Criteria --------------------------------------------------------------

    def search(self, query: str) -> None:
        self._search_query = query

    def filter_by_category(self, category: str) -> None:
        self._selected_category = category

    # -- Load ------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch every memo, seeding the remote store first if it is empty.

        Never raises: on failure the error is logged and the collection is
        left as it was (empty on a first load).
        """
        self._loading = True
        try:
            memos = await self._select_all()
            self._set_memos(memos)

            if not memos and self._seeder is not None:
                await self._seeder.ensure_sample_data()
                try:
                    self._set_memos(await self._select_all())
                except Exception:
                    logger.exception("Failed to reload memos after seeding")
        except Exception:
            logger.exception("Failed to load memos")
        finally:
            self._loading = False

    async def _select_all(self) -> list[Memo]:
        rows = await self._service.select_all()
        return [Memo.from_row(row) for row in rows or []]

    # -- CRUD ------------------------------------------------------------------

    async def create(self, form: MemoFormData) -> Memo | None:
        """Insert a memo and prepend it to the collection.

        Returns the stored memo (with its assigned id and timestamps), or
        None if the insert failed.
        """
        try:
            row = await self._service.insert(form.to_fields())
        except Exception:
            logger.exception("Failed to create memo")
            return None

        memo = Memo.from_row(row)
        # a load() that finished during the insert may already hold this row
        self._set_memos([memo, *(m for m in self._memos if m.id != memo.id)])
        logger.debug("Created memo %s", memo.id)
        return memo

    async def update(self, memo_id: str, form: MemoFormData) -> Memo | None:
        """Replace all editable fields of *memo_id*, keeping its position.

        Returns the updated memo, or None when the id is unknown or the
        update failed.
        """
        try:
            row = await self._service.update(memo_id, form.to_fields())
        except MemoNotFoundError:
            logger.warning("Update skipped: no memo with id %s", memo_id)
            return None
        except Exception:
            logger.exception("Failed to update memo %s", memo_id)
            return None

        updated = Memo.from_row(row)
        self._set_memos([updated if memo.id == memo_id else memo for memo in self._memos])
        return updated

    async def delete(self, memo_id: str) -> bool:
        """Delete *memo_id* remotely and locally.

        An unknown id is not an error.  Returns False only if the remote
        delete failed.
        """
        try:
            await self._service.delete(memo_id)
        except Exception:
            logger.exception("Failed to delete memo %s", memo_id)
            return False

        self._set_memos([memo for memo in self._memos if memo.id != memo_id])
        return True

    async def clear_all(self) -> bool:
        """Delete every remote memo and reset the collection and criteria."""
        try:
            await self._service.delete_all_except(SENTINEL_ID)
        except Exception:
            logger.exception("Failed to clear memos")
            return False

        self._set_memos([])
        self._search_query = ""
        self._selected_category = ALL_CATEGORIES
        logger.info("Cleared all memos")
        return True

    # -- Internal helpers ------------------------------------------------------

    def _set_memos(self, memos: list[Memo]) -> None:
        self._memos = memos
        self._version += 1

    def _refresh_view(self) -> None:
        key = (self._version, self._search_query, self._selected_category)
        if key == self._view_key:
            return
        self._filtered = filter_memos(self._memos, self._search_query, self._selected_category)
        self._stats = compute_stats(self._memos, self._filtered)
        self._view_key = key
