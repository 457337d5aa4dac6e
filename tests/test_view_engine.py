# tests/test_view_engine.py

from __future__ import annotations

from datetime import date, timedelta

from focusflow.tasks.task_models import Priority
from focusflow.view.view_engine import (
    Filter,
    SortDirection,
    SortKey,
    ViewParams,
    derive_view,
    derive_view_for,
    parse_sort_spec,
)

from .fakes import make_task


def _titles(tasks) -> list[str]:
    return [t.title for t in tasks]


def test_completed_filter_with_search() -> None:
    a = make_task("Buy milk", completed=True)
    c = make_task("Buy milk", completed=False)
    other = make_task("Walk dog", completed=True)

    view = derive_view([a, c, other], Filter.COMPLETED, "milk", SortKey.CREATED, SortDirection.ASC)
    assert view == [a]


def test_active_and_all_filters() -> None:
    a = make_task("a", completed=True)
    b = make_task("b")
    assert derive_view([a, b], Filter.ACTIVE, "", "none") == [b]
    assert derive_view([a, b], Filter.ALL, "", "none") == [a, b]


def test_search_is_trimmed_and_case_insensitive() -> None:
    a = make_task("Buy MILK")
    b = make_task("bread")
    assert derive_view([a, b], Filter.ALL, "  milk ", "none") == [a]
    assert derive_view([a, b], Filter.ALL, "   ", "none") == [a, b]


def test_sort_created_both_directions() -> None:
    old = make_task("old", created_at=1)
    new = make_task("new", created_at=2)
    assert derive_view([new, old], sort_key="created", sort_dir="asc") == [old, new]
    assert derive_view([old, new], sort_key="created", sort_dir="desc") == [new, old]


def test_sort_due_undated_is_infinitely_late() -> None:
    today = date(2026, 10, 18)
    undated = make_task("someday")
    tomorrow = make_task("tomorrow", due=today + timedelta(days=1))
    next_week = make_task("next week", due=today + timedelta(days=7))

    asc = derive_view([undated, next_week, tomorrow], sort_key="due", sort_dir="asc")
    assert _titles(asc) == ["tomorrow", "next week", "someday"]

    # Direction only flips the comparison: undated tasks land first when descending.
    desc = derive_view([tomorrow, undated, next_week], sort_key="due", sort_dir="desc")
    assert _titles(desc) == ["someday", "next week", "tomorrow"]


def test_sort_priority_rank() -> None:
    low = make_task("low", priority=Priority.LOW)
    high = make_task("high", priority=Priority.HIGH)
    mid = make_task("mid", priority=Priority.MEDIUM)

    assert _titles(derive_view([high, low, mid], sort_key="priority", sort_dir="asc")) == [
        "low",
        "mid",
        "high",
    ]
    assert _titles(derive_view([low, mid, high], sort_key="priority", sort_dir="desc")) == [
        "high",
        "mid",
        "low",
    ]


def test_sort_is_stable_for_ties_in_both_directions() -> None:
    tasks = [make_task(f"m{i}", priority=Priority.MEDIUM) for i in range(5)]
    tasks.insert(2, make_task("h", priority=Priority.HIGH))
    undated = [make_task(f"u{i}") for i in range(3)]

    asc = derive_view(tasks, sort_key="priority", sort_dir="asc")
    assert _titles(asc) == ["m0", "m1", "m2", "m3", "m4", "h"]

    desc = derive_view(tasks, sort_key="priority", sort_dir="desc")
    assert _titles(desc) == ["h", "m0", "m1", "m2", "m3", "m4"]

    assert _titles(derive_view(undated, sort_key="due", sort_dir="desc")) == ["u0", "u1", "u2"]


def test_unknown_sort_key_passes_order_through() -> None:
    tasks = [make_task("b", created_at=2), make_task("a", created_at=1)]
    assert derive_view(tasks, sort_key="bogus", sort_dir="asc") == tasks


def test_derive_view_is_pure_and_idempotent() -> None:
    tasks = [make_task("b", created_at=2), make_task("a", created_at=1)]
    snapshot = list(tasks)
    params = ViewParams(sort_key="created", sort_dir=SortDirection.ASC)

    first = derive_view_for(tasks, params)
    second = derive_view_for(tasks, params)

    assert first == second
    assert tasks == snapshot


def test_parse_sort_spec() -> None:
    assert parse_sort_spec("created-desc") == ("created", SortDirection.DESC)
    assert parse_sort_spec("Due-ASC") == ("due", SortDirection.ASC)
    assert parse_sort_spec("priority") == ("priority", SortDirection.ASC)


def test_filter_from_raw_defaults_to_all() -> None:
    assert Filter.from_raw("Completed") is Filter.COMPLETED
    assert Filter.from_raw("weird") is Filter.ALL
    assert Filter.from_raw(None) is Filter.ALL
