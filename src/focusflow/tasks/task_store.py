# src/focusflow/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from datetime import date
from typing import Any

from .persistence import TaskPersistence
from .task_models import Priority, Task, new_task_id, now_ms

logger = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class StoreChange:
    """
    What a mutation did, delivered to listeners after the persistence write.

    kind: create | update | delete | reorder | bulk_complete | clear_completed
    removed_ids: ids that left the collection (selection must drop them)
    """

    kind: str
    task_ids: tuple[str, ...] = ()
    removed_ids: frozenset[str] = frozenset()


StoreListener = Callable[[StoreChange], None]


class TaskStore:
    """
    Authoritative ordered task collection (manual order).

    Every mutation is: change the list -> persist (best-effort) -> notify listeners.
    Missing ids are tolerated as silent no-ops (the task may have been removed earlier
    in the same turn).
    """

    def __init__(self, persistence: TaskPersistence, *, load: bool = True) -> None:
        self._persistence = persistence
        self._tasks: list[Task] = persistence.load() if load else []
        self._listeners: list[StoreListener] = []
        logger.info("TaskStore ready key=%s total=%s", persistence.key, len(self._tasks))

    def close(self) -> None:
        self._listeners.clear()

    # ---- listeners ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, change: StoreChange) -> None:
        self._persistence.save(list(self._tasks))
        for listener in list(self._listeners):
            listener(change)

    # ---- read API ----

    def tasks(self) -> list[Task]:
        """Snapshot of the collection in manual order."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    def get(self, task_id: str) -> Task | None:
        idx = self.index_of(task_id)
        return self._tasks[idx] if idx != -1 else None

    # ---- mutations ----

    def create(
        self,
        title: str,
        due: date | None = None,
        priority: Priority | str | None = None,
    ) -> Task:
        if not title or not title.strip():
            raise ValueError("title is required")

        existing = {t.id for t in self._tasks}
        task_id = new_task_id()
        while task_id in existing:
            task_id = new_task_id()

        task = Task(
            id=task_id,
            title=title.strip(),
            created_at=now_ms(),
            completed=False,
            due=due,
            priority=Priority.from_raw(priority),
        )
        self._tasks.insert(0, task)
        logger.debug("Task created id=%s priority=%s due=%s", task.id, task.priority, task.due)
        self._commit(StoreChange("create", (task.id,)))
        return task

    def update(
        self,
        task_id: str,
        *,
        title: str = _UNSET,
        completed: bool = _UNSET,
        due: date | None = _UNSET,
        priority: Priority | str = _UNSET,
    ) -> None:
        idx = self.index_of(task_id)
        if idx == -1:
            logger.debug("update: task id=%s not found (ignored)", task_id)
            return

        fields: dict[str, Any] = {}
        if title is not _UNSET:
            if not title or not title.strip():
                raise ValueError("title must not be empty")
            fields["title"] = title.strip()
        if completed is not _UNSET:
            fields["completed"] = bool(completed)
        if due is not _UNSET:
            fields["due"] = due
        if priority is not _UNSET:
            fields["priority"] = Priority.from_raw(priority)

        self._tasks[idx] = replace(self._tasks[idx], **fields)
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(fields))
        self._commit(StoreChange("update", (task_id,)))

    def delete(self, task_id: str) -> None:
        idx = self.index_of(task_id)
        if idx == -1:
            logger.debug("delete: task id=%s not found (ignored)", task_id)
            return
        del self._tasks[idx]
        logger.debug("Task deleted id=%s", task_id)
        self._commit(StoreChange("delete", (task_id,), frozenset({task_id})))

    def reorder(self, task_id: str, target_index: int) -> bool:
        """
        Move a task to target_index in the manual order.

        Out-of-range targets are rejected, never clamped.
        """
        idx = self.index_of(task_id)
        if idx == -1 or target_index < 0 or target_index >= len(self._tasks):
            logger.debug("reorder rejected id=%s target=%s size=%s", task_id, target_index, len(self._tasks))
            return False

        task = self._tasks.pop(idx)
        self._tasks.insert(target_index, task)
        self._commit(StoreChange("reorder", (task_id,)))
        return True

    def bulk_complete(self, ids: Iterable[str]) -> int:
        wanted = set(ids)
        changed: list[str] = []
        for i, t in enumerate(self._tasks):
            if t.id in wanted:
                self._tasks[i] = replace(t, completed=True)
                changed.append(t.id)

        if not changed:
            return 0
        logger.debug("Bulk-completed %d task(s)", len(changed))
        self._commit(StoreChange("bulk_complete", tuple(changed)))
        return len(changed)

    def clear_completed(self) -> int:
        removed = [t.id for t in self._tasks if t.completed]
        if not removed:
            return 0
        self._tasks = [t for t in self._tasks if not t.completed]
        logger.debug("Cleared %d completed task(s)", len(removed))
        self._commit(StoreChange("clear_completed", tuple(removed), frozenset(removed)))
        return len(removed)
