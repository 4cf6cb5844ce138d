"""Memo state/query layer — models, remote service, seeding, and the store."""

from memopad.memos.models import (
    ALL_CATEGORIES,
    MEMO_CATEGORIES,
    Memo,
    MemoFormData,
    MemoStats,
    category_label,
)
from memopad.memos.seed import SeedBootstrapper
from memopad.memos.service import (
    SENTINEL_ID,
    LibsqlMemoService,
    MemoNotFoundError,
    MemoServiceError,
    RemoteMemoService,
)
from memopad.memos.store import MemoStore
from memopad.memos.views import compute_stats, filter_memos

__all__ = [
    "ALL_CATEGORIES",
    "MEMO_CATEGORIES",
    "SENTINEL_ID",
    "LibsqlMemoService",
    "Memo",
    "MemoFormData",
    "MemoNotFoundError",
    "MemoServiceError",
    "MemoStats",
    "MemoStore",
    "RemoteMemoService",
    "SeedBootstrapper",
    "category_label",
    "compute_stats",
    "filter_memos",
]
