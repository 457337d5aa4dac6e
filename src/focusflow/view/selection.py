# src/focusflow/view/selection.py

from __future__ import annotations

import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


class SelectionManager:
    """
    Ids the user has marked as selected.

    Invariant (after reconcile): every selected id is in the last computed view.
    Hidden ids are pruned, not merely hidden.
    """

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._ids

    def ids(self) -> frozenset[str]:
        return frozenset(self._ids)

    def is_selected(self, task_id: str) -> bool:
        return task_id in self._ids

    def toggle(self, task_id: str) -> bool:
        """Flip membership; returns the new state."""
        if task_id in self._ids:
            self._ids.discard(task_id)
            return False
        self._ids.add(task_id)
        return True

    def discard(self, task_ids: Iterable[str]) -> None:
        self._ids.difference_update(task_ids)

    def reconcile(self, view_ids: Iterable[str]) -> None:
        visible = set(view_ids)
        stale = self._ids - visible
        if stale:
            logger.debug("Selection pruned %d id(s) not in view", len(stale))
            self._ids -= stale

    def clear(self) -> None:
        self._ids.clear()
