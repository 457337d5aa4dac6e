# tests/test_session.py

from __future__ import annotations

import random
from datetime import date, timedelta

from focusflow.core.confirm import ConfirmAction
from focusflow.core.session import EMPTY_HINT, TaskSession
from focusflow.tasks.task_models import Priority
from focusflow.view.due_labels import DueStatus
from focusflow.view.view_engine import Filter, SortDirection

from .conftest import TODAY
from .fakes import MemoryBlobStore, RecordingSurface


def _titles(session: TaskSession) -> list[str]:
    return [t.title for t in session.view()]


def _assert_selection_in_view(session: TaskSession) -> None:
    view_ids = {t.id for t in session.view()}
    assert session.selection.ids() <= view_ids


def test_new_tasks_prepend(session: TaskSession) -> None:
    a = session.add_task("Buy milk", priority=Priority.MEDIUM)
    b = session.add_task("Call dentist", priority=Priority.HIGH)
    assert session.store.tasks() == [b, a]


def test_every_intent_renders_a_consistent_model(
    session: TaskSession, surface: RecordingSurface
) -> None:
    assert surface.last.empty_hint == EMPTY_HINT
    rendered = len(surface.models)

    a = session.add_task("Buy milk", due=TODAY)
    assert len(surface.models) == rendered + 1

    model = surface.last
    assert model.view == [a]
    assert model.empty_hint is None
    assert model.summary.text() == "1 shown · 1 active · 0 completed"
    assert model.rows[0].due_label is not None
    assert model.rows[0].due_label.status is DueStatus.TODAY
    assert model.can_clear_completed is False
    assert model.can_complete_selected is False


def test_due_sort_puts_dated_before_undated(session: TaskSession) -> None:
    session.add_task("someday")
    session.add_task("tomorrow", due=TODAY + timedelta(days=1))
    session.set_sort("due", SortDirection.ASC)
    assert _titles(session) == ["tomorrow", "someday"]


def test_reorder_out_of_range_rejected(session: TaskSession) -> None:
    a = session.add_task("A")
    session.add_task("B")
    before = session.store.tasks()
    assert session.reorder(a.id, 5) is False
    assert session.store.tasks() == before


def test_move_by_delta_rejects_instead_of_clamping(session: TaskSession) -> None:
    session.add_task("C")
    session.add_task("B")
    a = session.add_task("A")

    assert session.move_by_delta(a.id, -1) is False
    assert session.move_by_delta(a.id, 1) is True
    assert [t.title for t in session.store.tasks()] == ["B", "A", "C"]
    assert session.move_by_delta(a.id, 2) is False


def test_drop_on_upper_and_lower_half(session: TaskSession) -> None:
    c = session.add_task("C")
    b = session.add_task("B")
    a = session.add_task("A")

    # Target index is computed before the dragged task is lifted out.
    assert session.drop_on(a.id, b.id, after=False) is True
    assert [t.title for t in session.store.tasks()] == ["B", "A", "C"]

    # Dropping past the last item targets len(tasks): rejected like any out-of-range move.
    assert session.drop_on(a.id, c.id, after=True) is False
    assert session.drop_on(a.id, a.id, after=False) is False
    assert session.drop_on(a.id, b.id, after=True) is False  # already there


def test_selecting_then_deleting_prunes_selection(session: TaskSession) -> None:
    a = session.add_task("A")
    session.add_task("B")
    assert session.toggle_selection(a.id) is True

    pending = session.request_delete(a.id)
    assert pending is not None
    assert pending.action is ConfirmAction.DELETE
    assert session.store.get(a.id) is not None  # nothing happens until confirmed

    assert session.confirm(pending.token) is True
    assert session.store.get(a.id) is None
    assert a.id not in session.selection


def test_abort_keeps_task(session: TaskSession, surface: RecordingSurface) -> None:
    a = session.add_task("A")
    pending = session.request_delete(a.id)
    assert surface.last.pending == pending

    assert session.abort() is True
    assert session.store.get(a.id) is not None
    assert surface.last.pending is None
    assert session.confirm() is False


def test_stale_token_does_not_commit(session: TaskSession) -> None:
    a = session.add_task("A")
    b = session.add_task("B")
    first = session.request_delete(a.id)
    second = session.request_delete(b.id)
    assert first is not None and second is not None

    assert session.confirm(first.token) is False
    assert session.confirm(second.token) is True
    assert [t.title for t in session.store.tasks()] == ["A"]


def test_clear_completed_skips_prompt_when_nothing_completed(session: TaskSession) -> None:
    session.add_task("A")
    assert session.request_clear_completed() is None
    assert session.confirmations.pending is None


def test_clear_completed_two_step(session: TaskSession) -> None:
    a = session.add_task("A")
    session.add_task("B")
    session.toggle_completed(a.id)

    pending = session.request_clear_completed()
    assert pending is not None
    assert pending.action is ConfirmAction.CLEAR_COMPLETED
    assert session.confirm() is True
    assert _titles(session) == ["B"]


def test_no_confirmation_mode_deletes_immediately(store) -> None:
    session = TaskSession(store, confirm_destructive=False)
    a = session.add_task("A")
    assert session.request_delete(a.id) is None
    assert session.store.get(a.id) is None


def test_filter_change_prunes_hidden_selection(session: TaskSession) -> None:
    a = session.add_task("Buy milk")
    b = session.add_task("Walk dog")
    session.toggle_selection(a.id)
    session.toggle_selection(b.id)

    session.set_search("milk")
    assert session.selection.ids() == frozenset({a.id})

    # Clearing the search does not bring the pruned id back.
    session.set_search("")
    assert session.selection.ids() == frozenset({a.id})

    session.set_filter(Filter.COMPLETED)
    assert len(session.selection) == 0


def test_selecting_hidden_task_does_not_stick(session: TaskSession) -> None:
    a = session.add_task("A")
    session.set_filter("completed")
    assert session.toggle_selection(a.id) is False
    assert len(session.selection) == 0


def test_complete_selected(session: TaskSession, blobs: MemoryBlobStore) -> None:
    a = session.add_task("A")
    b = session.add_task("B")
    session.add_task("C")
    assert session.complete_selected() == 0

    session.toggle_selection(a.id)
    session.toggle_selection(b.id)
    assert session.model().can_complete_selected is True

    writes = len(blobs.writes)
    assert session.complete_selected() == 2
    assert len(blobs.writes) == writes + 1
    assert len(session.selection) == 0
    assert session.model().summary.completed_count == 2
    assert session.model().can_clear_completed is True


def test_edit_title_commit_and_abort(session: TaskSession, blobs: MemoryBlobStore) -> None:
    a = session.add_task("Buy milk")
    writes = len(blobs.writes)

    assert session.edit_title(a.id, "   ") is False
    assert session.edit_title(a.id, " Buy milk ") is False
    assert len(blobs.writes) == writes

    assert session.edit_title(a.id, "  Buy oat milk ") is True
    task = session.store.get(a.id)
    assert task is not None and task.title == "Buy oat milk"


def test_toggle_first_visible_uses_display_order(session: TaskSession) -> None:
    session.add_task("low", priority=Priority.LOW)
    session.add_task("high", priority=Priority.HIGH)
    session.set_sort_spec("priority-asc")

    first = session.toggle_first_visible()
    assert first is not None and first.title == "low"
    task = session.store.get(first.id)
    assert task is not None and task.completed is True


def test_set_priority_and_due(session: TaskSession) -> None:
    a = session.add_task("A")
    session.set_priority(a.id, "high")
    session.set_due(a.id, date(2026, 12, 1))
    task = session.store.get(a.id)
    assert task is not None
    assert task.priority is Priority.HIGH
    assert task.due == date(2026, 12, 1)


def test_selection_invariant_after_random_intents(session: TaskSession) -> None:
    rng = random.Random(99)
    for step in range(300):
        tasks = session.store.tasks()
        choice = rng.randrange(8)
        if choice == 0 or not tasks:
            session.add_task(f"task {step % 7}")
        elif choice == 1:
            session.toggle_selection(rng.choice(tasks).id)
        elif choice == 2:
            session.toggle_completed(rng.choice(tasks).id)
        elif choice == 3:
            session.request_delete(rng.choice(tasks).id)
            session.confirm()
        elif choice == 4:
            session.set_filter(rng.choice(list(Filter)))
        elif choice == 5:
            session.set_search(rng.choice(["", "task 1", "3", "zzz"]))
        elif choice == 6:
            session.complete_selected()
        else:
            session.move_by_delta(rng.choice(tasks).id, rng.choice([-1, 1]))
        _assert_selection_in_view(session)


def test_session_close_stops_rendering(session: TaskSession, surface: RecordingSurface) -> None:
    session.close()
    rendered = len(surface.models)
    session.store.create("A")
    assert len(surface.models) == rendered
