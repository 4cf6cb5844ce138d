"""Tests for the filtered view and stats derivations."""

from memopad.memos.models import Memo
from memopad.memos.views import compute_stats, filter_memos, matches_query


def _memo(
    memo_id: str, title: str, category: str, tags: list[str], content: str = ""
) -> Memo:
    return Memo(id=memo_id, title=title, content=content, category=category, tags=tags)


MEETING = _memo("1", "Meeting notes", "work", ["q3"])
HABIT = _memo("2", "Habit tracker", "idea", ["app"])
GROCERIES = _memo("3", "Groceries", "personal", ["Weekend"], content="Buy NOTEBOOKS")
BASE = [MEETING, HABIT, GROCERIES]


# -- matches_query -------------------------------------------------------------


def test_matches_title_case_insensitive() -> None:
    assert matches_query(MEETING, "MEETING")


def test_matches_content() -> None:
    assert matches_query(GROCERIES, "notebook")


def test_matches_any_tag() -> None:
    assert matches_query(GROCERIES, "weekend")
    assert not matches_query(HABIT, "weekend")


# -- filter_memos --------------------------------------------------------------


def test_no_filters_is_identity() -> None:
    assert filter_memos(BASE) == BASE
    assert filter_memos(BASE, "", "all") == BASE


def test_blank_query_ignored() -> None:
    assert filter_memos(BASE, "   ") == BASE


def test_category_only() -> None:
    assert filter_memos(BASE, category="idea") == [HABIT]


def test_unknown_category_matches_nothing() -> None:
    assert filter_memos(BASE, category="recipes") == []


def test_query_only_keeps_base_order() -> None:
    # "note" hits MEETING's title and GROCERIES' content
    assert filter_memos(BASE, "note") == [MEETING, GROCERIES]


def test_category_and_query_are_conjunctive() -> None:
    both = filter_memos(BASE, "note", "work")
    by_category = filter_memos(BASE, category="work")
    by_query = filter_memos(BASE, "note")
    assert both == [MEETING]
    assert all(memo in by_category and memo in by_query for memo in both)


def test_filter_does_not_mutate_input() -> None:
    base = list(BASE)
    filter_memos(base, "habit", "idea")
    assert base == BASE


def test_query_not_trimmed_for_matching() -> None:
    # Leading space is part of the substring: "Meeting notes" contains " notes"
    assert filter_memos(BASE, " notes") == [MEETING]


# -- compute_stats -------------------------------------------------------------


def test_stats_count_base_collection() -> None:
    filtered = filter_memos(BASE, category="work")
    stats = compute_stats(BASE, filtered)
    assert stats.total == 3
    assert stats.filtered == 1
    assert stats.by_category == {"work": 1, "idea": 1, "personal": 1}


def test_stats_empty() -> None:
    stats = compute_stats([], [])
    assert stats.total == 0
    assert stats.filtered == 0
    assert stats.by_category == {}
