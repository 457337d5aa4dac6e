# src/focusflow/tasks/persistence.py

"""
Task collection <-> blob store.

The whole collection lives under one key as a JSON array of
{id, title, completed, createdAt, due, priority}. There is no version field;
older or hand-edited data is handled by per-field coercion on load.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import replace
from datetime import date
from typing import Any

from ..config import DEFAULT_STORAGE_KEY
from ..core.ports import BlobStore
from .task_models import Priority, Task, new_task_id, now_ms

logger = logging.getLogger(__name__)


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "completed": task.completed,
        "createdAt": task.created_at,
        "due": task.due.isoformat() if task.due else None,
        "priority": task.priority.value,
    }


def _coerce_created_at(raw: Any, fallback: int) -> int:
    if isinstance(raw, bool):
        return fallback
    if isinstance(raw, str) and raw.strip():
        try:
            raw = float(raw)
        except ValueError:
            return fallback
    if not isinstance(raw, (int, float)):
        return fallback
    # json accepts NaN / Infinity / 1e400; none of them is a timestamp.
    if isinstance(raw, float) and not math.isfinite(raw):
        return fallback
    return int(raw) or fallback


def _coerce_due(raw: Any) -> date | None:
    if not raw or not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        return None


def task_from_record(raw: dict[str, Any], *, now: int | None = None) -> Task | None:
    """
    Coerce one stored record into a valid Task.

    Returns None when the record cannot become a valid task (blank title).
    """
    raw_id = raw.get("id")
    task_id = new_task_id() if raw_id is None or raw_id == "" else str(raw_id)

    raw_title = raw.get("title")
    title = "" if raw_title is None else str(raw_title)
    if not title.strip():
        return None

    return Task(
        id=task_id,
        title=title,
        completed=bool(raw.get("completed")),
        created_at=_coerce_created_at(raw.get("createdAt"), now if now is not None else now_ms()),
        due=_coerce_due(raw.get("due")),
        priority=Priority.from_raw(raw.get("priority")),
    )


class TaskPersistence:
    """
    Persistence adapter for the task collection.

    load(): never raises for bad data; a corrupt store must never crash startup.
    save(): best-effort, not transactional with memory; failures are logged only.
    """

    def __init__(self, blobs: BlobStore, *, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._blobs = blobs
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Task]:
        try:
            raw = self._blobs.get(self._key)
        except Exception:
            logger.exception("Failed to read stored tasks key=%s", self._key)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.exception("Failed to parse stored tasks key=%s", self._key)
            return []

        if not isinstance(data, list):
            logger.warning(
                "Stored tasks are not a list (got %s); starting empty.", type(data).__name__
            )
            return []

        now = now_ms()
        out: list[Task] = []
        seen: set[str] = set()
        dropped = 0
        for item in data:
            if not isinstance(item, dict):
                dropped += 1
                continue
            try:
                task = task_from_record(item, now=now)
            except (ValueError, OverflowError, RecursionError):
                logger.warning("Unreadable stored task record dropped.", exc_info=True)
                task = None
            if task is None:
                dropped += 1
                continue
            if task.id in seen:
                fresh = new_task_id()
                logger.warning("Duplicate stored task id=%s; reassigned to %s", task.id, fresh)
                task = replace(task, id=fresh)
            seen.add(task.id)
            out.append(task)

        if dropped:
            logger.warning("Dropped %d malformed stored task record(s).", dropped)
        logger.info("Loaded %d task(s) from key=%s", len(out), self._key)
        return out

    def save(self, tasks: list[Task]) -> bool:
        try:
            payload = json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)
            self._blobs.set(self._key, payload)
        except Exception:
            logger.exception("Failed to save %d task(s) key=%s", len(tasks), self._key)
            return False
        logger.debug("Saved %d task(s) key=%s", len(tasks), self._key)
        return True
