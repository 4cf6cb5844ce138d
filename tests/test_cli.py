"""Tests for the memopad command line."""

from pathlib import Path

import pytest

from memopad.cli import build_parser, format_memo_line, main
from memopad.memos.models import Memo
from memopad.memos.seed import SAMPLE_MEMOS

pytestmark = pytest.mark.usefixtures("_no_turso")


@pytest.fixture
def db(tmp_path: Path) -> list[str]:
    """Global args pointing the CLI at a temp database without seeding."""
    return ["--db", str(tmp_path / "cli.db"), "--no-seed"]


def _created_id(out: str) -> str:
    return out.strip().split()[-1]


def test_format_memo_line() -> None:
    memo = Memo(id="m1", title="Standup", category="work", tags=["daily", "team"])
    assert format_memo_line(memo) == "m1  [Work]  Standup  #daily #team"


def test_format_memo_line_unknown_category() -> None:
    memo = Memo(id="m1", title="Pasta", category="recipes")
    assert format_memo_line(memo) == "m1  [recipes]  Pasta"


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_list_empty(db, capsys) -> None:
    assert main([*db, "list"]) == 0
    assert "No memos found." in capsys.readouterr().out


def test_add_show_and_list(db, capsys) -> None:
    assert main([*db, "add", "--title", "Standup", "--category", "work", "--tag", "daily"]) == 0
    memo_id = _created_id(capsys.readouterr().out)

    assert main([*db, "show", memo_id]) == 0
    out = capsys.readouterr().out
    assert "Standup" in out
    assert "category: Work" in out
    assert "tags:     daily" in out

    assert main([*db, "list", "--search", "STAND"]) == 0
    out = capsys.readouterr().out
    assert memo_id in out
    assert "--- 1 of 1 memos ---" in out


def test_edit_replaces_fields(db, capsys) -> None:
    main([*db, "add", "--title", "Draft"])
    memo_id = _created_id(capsys.readouterr().out)

    assert main([*db, "edit", memo_id, "--title", "Final", "--category", "idea"]) == 0
    capsys.readouterr()

    main([*db, "show", memo_id])
    out = capsys.readouterr().out
    assert out.startswith("Final")
    assert "category: Idea" in out


def test_edit_unknown_id_fails(db, capsys) -> None:
    assert main([*db, "edit", "missing", "--title", "x"]) == 1
    assert "was not updated" in capsys.readouterr().err


def test_show_unknown_id_fails(db, capsys) -> None:
    assert main([*db, "show", "missing"]) == 1
    assert "No memo with id missing" in capsys.readouterr().err


def test_delete(db, capsys) -> None:
    main([*db, "add", "--title", "Temp"])
    memo_id = _created_id(capsys.readouterr().out)

    assert main([*db, "delete", memo_id]) == 0
    capsys.readouterr()
    assert main([*db, "show", memo_id]) == 1


def test_clear_requires_confirmation(db, capsys) -> None:
    main([*db, "add", "--title", "Keep"])
    capsys.readouterr()

    assert main([*db, "clear"]) == 1
    assert main([*db, "clear", "--yes"]) == 0
    capsys.readouterr()

    main([*db, "list"])
    assert "No memos found." in capsys.readouterr().out


def test_first_run_seeds_and_stats(tmp_path: Path, capsys) -> None:
    args = ["--db", str(tmp_path / "seeded.db")]

    assert main([*args, "stats"]) == 0
    out = capsys.readouterr().out
    assert f"Total: {len(SAMPLE_MEMOS)}" in out
    assert "Work" in out
