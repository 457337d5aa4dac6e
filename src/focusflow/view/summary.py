# src/focusflow/view/summary.py

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from ..tasks.task_models import Task


@dataclass(frozen=True, slots=True)
class Summary:
    visible_count: int
    active_count: int
    completed_count: int

    def text(self) -> str:
        return (
            f"{self.visible_count} shown · "
            f"{self.active_count} active · "
            f"{self.completed_count} completed"
        )


def summarize(tasks: Sequence[Task], view: Sequence[Task]) -> Summary:
    """Active/completed are counted over the full store; visible is the view length."""
    active = sum(1 for t in tasks if not t.completed)
    return Summary(
        visible_count=len(view),
        active_count=active,
        completed_count=len(tasks) - active,
    )


def can_complete_selected(selection: Collection[str]) -> bool:
    return len(selection) > 0


def can_clear_completed(tasks: Sequence[Task]) -> bool:
    return any(t.completed for t in tasks)
