# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from focusflow.core.session import TaskSession
from focusflow.tasks.persistence import TaskPersistence
from focusflow.tasks.task_store import TaskStore

from .fakes import MemoryBlobStore, RecordingSurface

TODAY = date(2026, 10, 18)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the session.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the process environment.
    """
    return SimpleNamespace(
        app_name="focusflow-test",
        log_level="DEBUG",
        console_enabled=False,
        confirm_destructive=True,
        default_filter="all",
        default_sort="created-desc",
        data_dir=tmp_path,
        store_path=tmp_path / "blobs.sqlite3",
        storage_key="focusflow.todos.v1",
        log_file=tmp_path / "focusflow.log",
    )


@pytest.fixture()
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture()
def persistence(blobs: MemoryBlobStore) -> TaskPersistence:
    return TaskPersistence(blobs)


@pytest.fixture()
def store(persistence: TaskPersistence) -> TaskStore:
    return TaskStore(persistence)


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def session(store: TaskStore, surface: RecordingSurface) -> TaskSession:
    """
    Session wired to an in-memory blob store and a recording render surface.

    `today` is pinned so due labels are deterministic.
    """
    return TaskSession(store, surface=surface, today=lambda: TODAY)
