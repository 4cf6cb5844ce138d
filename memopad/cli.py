"""memopad command line — manage memos from a terminal.

Usage examples:
    # Newest memos first
    memopad list

    # Work memos mentioning "roadmap"
    memopad list --category work --search roadmap

    # Create and edit
    memopad add --title "Standup" --content "Blocked on review" --category work --tag daily
    memopad edit <id> --title "Standup" --content "Unblocked" --category work

    # Counts per category
    memopad stats
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from memopad.config import settings
from memopad.memos.models import ALL_CATEGORIES, MEMO_CATEGORIES, MemoFormData, category_label
from memopad.memos.service import LibsqlMemoService
from memopad.memos.store import MemoStore

if TYPE_CHECKING:
    from memopad.memos.models import Memo

logger = logging.getLogger(__name__)


def format_memo_line(memo: Memo) -> str:
    tags = " ".join(f"#{tag}" for tag in memo.tags)
    line = f"{memo.id}  [{category_label(memo.category)}]  {memo.title}"
    return f"{line}  {tags}" if tags else line


def format_memo_detail(memo: Memo) -> str:
    lines = [
        memo.title,
        f"id:       {memo.id}",
        f"category: {category_label(memo.category)}",
        f"tags:     {', '.join(memo.tags) if memo.tags else '-'}",
        f"created:  {memo.created_at}",
        f"updated:  {memo.updated_at}",
        "",
        memo.content,
    ]
    return "\n".join(lines)


def _form_from_args(args: argparse.Namespace) -> MemoFormData:
    return MemoFormData(
        title=args.title,
        content=args.content,
        category=args.category,
        tags=args.tag or [],
    )


def build_store(db_path: Path | None = None, *, seed: bool = True) -> MemoStore:
    """Wire a MemoStore to the configured libSQL database."""
    return MemoStore(LibsqlMemoService(db_path=db_path), seed=seed and settings.seed_sample_data)


async def run(args: argparse.Namespace) -> int:
    """Execute one CLI command against a freshly loaded store. Returns the exit code."""
    store = build_store(args.db, seed=not args.no_seed)
    logger.debug("Running %s against %s", args.command, args.db or settings.database_path)
    await store.load()

    if args.command == "list":
        store.filter_by_category(args.category)
        store.search(args.search)
        memos = store.filtered_memos
        if not memos:
            print("No memos found.")
            return 0
        for memo in memos:
            print(format_memo_line(memo))
        stats = store.stats
        print(f"\n--- {stats.filtered} of {stats.total} memos ---")
        return 0

    if args.command == "show":
        memo = store.get_memo_by_id(args.id)
        if memo is None:
            print(f"No memo with id {args.id}", file=sys.stderr)
            return 1
        print(format_memo_detail(memo))
        return 0

    if args.command == "add":
        memo = await store.create(_form_from_args(args))
        if memo is None:
            print("ERROR: failed to create memo (see log)", file=sys.stderr)
            return 1
        print(f"Created {memo.id}")
        return 0

    if args.command == "edit":
        memo = await store.update(args.id, _form_from_args(args))
        if memo is None:
            print(f"ERROR: memo {args.id} was not updated (see log)", file=sys.stderr)
            return 1
        print(f"Updated {memo.id}")
        return 0

    if args.command == "delete":
        if not await store.delete(args.id):
            print(f"ERROR: failed to delete memo {args.id} (see log)", file=sys.stderr)
            return 1
        print(f"Deleted {args.id}")
        return 0

    if args.command == "clear":
        if not args.yes:
            print("Refusing to delete every memo without --yes", file=sys.stderr)
            return 1
        if not await store.clear_all():
            print("ERROR: failed to clear memos (see log)", file=sys.stderr)
            return 1
        print("All memos deleted.")
        return 0

    if args.command == "stats":
        stats = store.stats
        print(f"Total: {stats.total}")
        for category, count in sorted(stats.by_category.items()):
            print(f"  {category_label(category):10s} {count}")
        return 0

    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


def _add_form_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--title", required=True, help="Memo title")
    parser.add_argument("--content", default="", help="Memo body (markdown)")
    parser.add_argument(
        "--category",
        default="personal",
        help=f"One of: {', '.join(MEMO_CATEGORIES)} (default: personal)",
    )
    parser.add_argument("--tag", action="append", help="Tag label (repeatable)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memopad", description="Manage memos")
    parser.add_argument("--db", type=Path, help="Local database file (overrides settings)")
    parser.add_argument("--no-seed", action="store_true", help="Do not add sample memos on first run")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="List memos, newest first")
    list_parser.add_argument("--search", "-s", default="", help="Substring of title, content or tag")
    list_parser.add_argument("--category", "-c", default=ALL_CATEGORIES, help="Category filter")

    show_parser = sub.add_parser("show", help="Show one memo")
    show_parser.add_argument("id")

    add_parser = sub.add_parser("add", help="Create a memo")
    _add_form_arguments(add_parser)

    edit_parser = sub.add_parser("edit", help="Replace a memo's fields")
    edit_parser.add_argument("id")
    _add_form_arguments(edit_parser)

    delete_parser = sub.add_parser("delete", help="Delete a memo")
    delete_parser.add_argument("id")

    clear_parser = sub.add_parser("clear", help="Delete every memo")
    clear_parser.add_argument("--yes", action="store_true", help="Confirm deletion")

    sub.add_parser("stats", help="Count memos per category")
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.get_log_level(),
    )
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
