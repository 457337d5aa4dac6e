# src/focusflow/view/view_engine.py

"""
Derived views over the task collection.

Everything here is a pure function of (task snapshot, view parameters):
filter -> search -> stable sort. The store's manual order is never touched.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import Task


class Filter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def from_raw(cls, raw: str | None) -> Filter:
        if not raw:
            return cls.ALL
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.ALL


class SortKey(StrEnum):
    CREATED = "created"
    DUE = "due"
    PRIORITY = "priority"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class ViewParams:
    filter: Filter = Filter.ALL
    search_query: str = ""
    # Raw key: an unknown key is allowed and means "no reordering".
    sort_key: str = SortKey.CREATED
    sort_dir: SortDirection = SortDirection.DESC


def parse_sort_spec(spec: str) -> tuple[str, SortDirection]:
    """
    "created-desc" -> ("created", DESC).

    Direction defaults to ASC when missing or unknown; the key is passed through as-is.
    """
    key, _, direction = (spec or "").strip().lower().partition("-")
    try:
        sort_dir = SortDirection(direction)
    except ValueError:
        sort_dir = SortDirection.ASC
    return key, sort_dir


def filter_tasks(tasks: Sequence[Task], view_filter: Filter | str) -> list[Task]:
    if view_filter == Filter.ACTIVE:
        return [t for t in tasks if not t.completed]
    if view_filter == Filter.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def search_tasks(tasks: Sequence[Task], query: str) -> list[Task]:
    q = (query or "").strip().lower()
    if not q:
        return list(tasks)
    return [t for t in tasks if q in t.title.lower()]


def _due_key(task: Task) -> float:
    # Undated tasks are "infinitely late"; direction only flips the comparison.
    return float(task.due.toordinal()) if task.due else math.inf


def sort_tasks(
    tasks: Sequence[Task],
    sort_key: str,
    sort_dir: SortDirection | str = SortDirection.ASC,
) -> list[Task]:
    """
    Stable sort; ties keep their incoming relative order in both directions.

    Unknown keys return the input order unchanged.
    """
    reverse = sort_dir == SortDirection.DESC

    if sort_key == SortKey.CREATED:
        return sorted(tasks, key=lambda t: t.created_at, reverse=reverse)
    if sort_key == SortKey.DUE:
        return sorted(tasks, key=_due_key, reverse=reverse)
    if sort_key == SortKey.PRIORITY:
        return sorted(tasks, key=lambda t: t.priority.rank, reverse=reverse)
    return list(tasks)


def derive_view(
    tasks: Sequence[Task],
    view_filter: Filter | str = Filter.ALL,
    search_query: str = "",
    sort_key: str = SortKey.CREATED,
    sort_dir: SortDirection | str = SortDirection.DESC,
) -> list[Task]:
    filtered = filter_tasks(tasks, view_filter)
    searched = search_tasks(filtered, search_query)
    return sort_tasks(searched, sort_key, sort_dir)


def derive_view_for(tasks: Sequence[Task], params: ViewParams) -> list[Task]:
    return derive_view(tasks, params.filter, params.search_query, params.sort_key, params.sort_dir)
