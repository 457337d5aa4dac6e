# src/focusflow/view/due_labels.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class DueStatus(StrEnum):
    TODAY = "today"
    OVERDUE = "overdue"
    FUTURE = "future"


@dataclass(frozen=True, slots=True)
class DueLabel:
    label: str
    status: DueStatus


def _short_date(d: date) -> str:
    return f"{d:%b} {d.day}"


def format_due(due: date | None, today: date | None = None) -> DueLabel | None:
    """
    Human label for a due date relative to `today` (calendar days, no time component).

    today      -> "Today"                      (today)
    yesterday  -> "Yesterday"                  (overdue)
    earlier    -> "Oct 3 · 15d overdue"        (overdue)
    tomorrow   -> "Oct 19 · tomorrow"          (future)
    2..7 days  -> "Oct 22 · in 4d"             (future)
    later      -> "Dec 1"                      (future)
    """
    if due is None:
        return None
    if today is None:
        today = date.today()

    diff_days = (due - today).days
    label = _short_date(due)

    if diff_days == 0:
        return DueLabel("Today", DueStatus.TODAY)
    if diff_days == -1:
        return DueLabel("Yesterday", DueStatus.OVERDUE)
    if diff_days < -1:
        return DueLabel(f"{label} · {abs(diff_days)}d overdue", DueStatus.OVERDUE)
    if diff_days == 1:
        return DueLabel(f"{label} · tomorrow", DueStatus.FUTURE)
    if diff_days <= 7:
        return DueLabel(f"{label} · in {diff_days}d", DueStatus.FUTURE)
    return DueLabel(label, DueStatus.FUTURE)
