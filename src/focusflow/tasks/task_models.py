# src/focusflow/tasks/task_models.py

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class Priority(StrEnum):
    """
    Task priority.

    Ordering for sorting is by rank (low < medium < high), not by the string value.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def from_raw(cls, raw: object) -> Priority:
        if isinstance(raw, Priority):
            return raw
        if not isinstance(raw, str):
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


_PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def new_task_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    created_at: int  # ms since epoch
    completed: bool = False
    due: date | None = None
    priority: Priority = Priority.MEDIUM
