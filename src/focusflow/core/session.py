# src/focusflow/core/session.py

"""
Task session: the one object a front end talks to.

Owns the view parameters, the selection and the confirmation gate, and holds the TaskStore
by reference. Every intent runs to completion as

    mutate store -> persist -> recompute view -> reconcile selection -> render

so the render surface never sees an intermediate state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date

from ..tasks.task_models import Priority, Task
from ..tasks.task_store import StoreChange, TaskStore
from ..view.due_labels import DueLabel, format_due
from ..view.selection import SelectionManager
from ..view.summary import Summary, can_clear_completed, can_complete_selected, summarize
from ..view.view_engine import Filter, SortDirection, ViewParams, derive_view_for, parse_sort_spec
from .confirm import ConfirmAction, ConfirmationGate, PendingConfirmation
from .ports import RenderSurface

logger = logging.getLogger(__name__)

EMPTY_HINT = "No tasks yet. Add your first one above."


@dataclass(frozen=True, slots=True)
class TaskRow:
    task: Task
    selected: bool
    due_label: DueLabel | None


@dataclass(frozen=True, slots=True)
class RenderModel:
    rows: tuple[TaskRow, ...]
    summary: Summary
    can_complete_selected: bool
    can_clear_completed: bool
    params: ViewParams
    pending: PendingConfirmation | None = None
    empty_hint: str | None = None

    @property
    def view(self) -> list[Task]:
        return [r.task for r in self.rows]


class TaskSession:
    def __init__(
        self,
        store: TaskStore,
        *,
        params: ViewParams | None = None,
        surface: RenderSurface | None = None,
        confirm_destructive: bool = True,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.store = store
        self.selection = SelectionManager()
        self.confirmations = ConfirmationGate()
        self.params = params or ViewParams()
        self.surface = surface
        self.confirm_destructive = confirm_destructive
        self._today = today
        self._view: list[Task] = []
        self._model: RenderModel | None = None
        self._unsubscribe = store.subscribe(self._on_store_change)
        self._refresh()

    def close(self) -> None:
        self._unsubscribe()
        self.store.close()

    # ---- recompute ----

    def _on_store_change(self, change: StoreChange) -> None:
        if change.removed_ids:
            self.selection.discard(change.removed_ids)
        self._refresh()

    def _refresh(self) -> None:
        tasks = self.store.tasks()
        view = derive_view_for(tasks, self.params)
        self.selection.reconcile(t.id for t in view)
        self._view = view

        today = self._today()
        rows = tuple(
            TaskRow(task=t, selected=self.selection.is_selected(t.id), due_label=format_due(t.due, today))
            for t in view
        )
        self._model = RenderModel(
            rows=rows,
            summary=summarize(tasks, view),
            can_complete_selected=can_complete_selected(self.selection.ids()),
            can_clear_completed=can_clear_completed(tasks),
            params=self.params,
            pending=self.confirmations.pending,
            empty_hint=None if view else EMPTY_HINT,
        )
        if self.surface is not None:
            self.surface.render(self._model)

    def view(self) -> list[Task]:
        """Last computed view."""
        return list(self._view)

    def model(self) -> RenderModel:
        assert self._model is not None
        return self._model

    # ---- task intents ----

    def add_task(
        self,
        title: str,
        *,
        due: date | None = None,
        priority: Priority | str | None = None,
    ) -> Task:
        return self.store.create(title, due=due, priority=priority)

    def edit_title(self, task_id: str, raw_title: str) -> bool:
        """
        Commit an inline title edit.

        A blank or unchanged title aborts the edit: no store write, just a re-render.
        """
        task = self.store.get(task_id)
        new_title = (raw_title or "").strip()
        if task is None or not new_title or new_title == task.title:
            self._refresh()
            return False
        self.store.update(task_id, title=new_title)
        return True

    def toggle_completed(self, task_id: str) -> None:
        task = self.store.get(task_id)
        if task is None:
            return
        self.store.update(task_id, completed=not task.completed)

    def toggle_first_visible(self) -> Task | None:
        if not self._view:
            return None
        first = self._view[0]
        self.toggle_completed(first.id)
        return first

    def set_priority(self, task_id: str, priority: Priority | str) -> None:
        self.store.update(task_id, priority=priority)

    def set_due(self, task_id: str, due: date | None) -> None:
        self.store.update(task_id, due=due)

    # ---- ordering ----

    def reorder(self, task_id: str, target_index: int) -> bool:
        return self.store.reorder(task_id, target_index)

    def move_by_delta(self, task_id: str, delta: int) -> bool:
        """Keyboard move; out-of-range targets are rejected, not clamped."""
        idx = self.store.index_of(task_id)
        if idx == -1:
            return False
        return self.store.reorder(task_id, idx + delta)

    def drop_on(self, dragging_id: str, over_id: str, *, after: bool) -> bool:
        """
        Drag feedback: dropping onto the upper/lower half of another task.

        Target is computed in the manual order, not the display order.
        """
        if dragging_id == over_id:
            return False
        dragging_idx = self.store.index_of(dragging_id)
        over_idx = self.store.index_of(over_id)
        if dragging_idx == -1 or over_idx == -1:
            return False
        target = over_idx + (1 if after else 0)
        if target == dragging_idx:
            return False
        return self.store.reorder(dragging_id, target)

    # ---- selection / bulk ----

    def toggle_selection(self, task_id: str) -> bool:
        """Returns whether the id is selected after reconciliation (hidden ids never stick)."""
        self.selection.toggle(task_id)
        self._refresh()
        return self.selection.is_selected(task_id)

    def complete_selected(self) -> int:
        if not can_complete_selected(self.selection.ids()):
            return 0
        ids = self.selection.ids()
        self.selection.clear()
        completed = self.store.bulk_complete(ids)
        if not completed:
            self._refresh()
        return completed

    # ---- destructive actions (two-step) ----

    def request_delete(self, task_id: str) -> PendingConfirmation | None:
        if self.store.get(task_id) is None:
            return None
        if not self.confirm_destructive:
            self.store.delete(task_id)
            return None
        pending = self.confirmations.request(
            ConfirmAction.DELETE,
            "Delete this task?",
            lambda: self.store.delete(task_id),
            task_id=task_id,
        )
        self._refresh()
        return pending

    def request_clear_completed(self) -> PendingConfirmation | None:
        """No-op (and no prompt) when nothing is completed."""
        if not can_clear_completed(self.store.tasks()):
            return None
        if not self.confirm_destructive:
            self.store.clear_completed()
            return None
        pending = self.confirmations.request(
            ConfirmAction.CLEAR_COMPLETED,
            "Clear all completed tasks?",
            self.store.clear_completed,
        )
        self._refresh()
        return pending

    def confirm(self, token: int | None = None) -> bool:
        pending = self.confirmations.pending
        done = self.confirmations.confirm(token)
        if done:
            logger.info("Confirmed %s", pending.action if pending else "?")
            # Store listeners only fire on an actual change; refresh to drop the prompt.
            self._refresh()
        return done

    def abort(self, token: int | None = None) -> bool:
        done = self.confirmations.abort(token)
        if done:
            self._refresh()
        return done

    # ---- view parameters ----

    def set_filter(self, view_filter: Filter | str) -> None:
        self.params = replace(self.params, filter=Filter.from_raw(str(view_filter)))
        self._refresh()

    def set_search(self, query: str) -> None:
        self.params = replace(self.params, search_query=query or "")
        self._refresh()

    def set_sort(self, sort_key: str, sort_dir: SortDirection | str = SortDirection.ASC) -> None:
        self.params = replace(self.params, sort_key=sort_key, sort_dir=SortDirection(sort_dir))
        self._refresh()

    def set_sort_spec(self, spec: str) -> None:
        key, direction = parse_sort_spec(spec)
        self.set_sort(key, direction)
