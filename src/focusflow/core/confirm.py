# src/focusflow/core/confirm.py

from __future__ import annotations

"""
Two-step confirmation for destructive actions.

request() parks the action and hands back a PendingConfirmation (the "request-confirmation
event"); the front end asks the user however it likes and then calls confirm() or abort().
Only one action can be pending; a new request replaces the previous one.
"""

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)


class ConfirmAction(StrEnum):
    DELETE = "delete"
    CLEAR_COMPLETED = "clear_completed"


@dataclass(frozen=True, slots=True)
class PendingConfirmation:
    token: int
    action: ConfirmAction
    prompt: str
    task_id: str | None = None


class ConfirmationGate:
    def __init__(self) -> None:
        self._tokens = itertools.count(1)
        self._pending: PendingConfirmation | None = None
        self._commit: Callable[[], None] | None = None

    @property
    def pending(self) -> PendingConfirmation | None:
        return self._pending

    def request(
        self,
        action: ConfirmAction,
        prompt: str,
        commit: Callable[[], None],
        *,
        task_id: str | None = None,
    ) -> PendingConfirmation:
        if self._pending is not None:
            logger.debug("Replacing pending confirmation token=%s", self._pending.token)
        self._pending = PendingConfirmation(
            token=next(self._tokens),
            action=action,
            prompt=prompt,
            task_id=task_id,
        )
        self._commit = commit
        return self._pending

    def _take(self, token: int | None) -> Callable[[], None] | None:
        if self._pending is None:
            return None
        if token is not None and token != self._pending.token:
            logger.debug("Stale confirmation token=%s (pending=%s)", token, self._pending.token)
            return None
        commit = self._commit
        self._pending = None
        self._commit = None
        return commit

    def confirm(self, token: int | None = None) -> bool:
        """Run the pending action. token=None means "whatever is pending"."""
        commit = self._take(token)
        if commit is None:
            return False
        commit()
        return True

    def abort(self, token: int | None = None) -> bool:
        return self._take(token) is not None
