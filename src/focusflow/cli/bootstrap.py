# src/focusflow/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the blob store, persistence adapter, task store and session together.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import BlobStore, RenderSurface
from ..core.session import TaskSession
from ..storage.sqlite_blob import SqliteBlobStore
from ..tasks.persistence import TaskPersistence
from ..tasks.task_store import TaskStore
from ..view.view_engine import Filter, ViewParams, parse_sort_spec

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def initial_view_params(settings) -> ViewParams:
    sort_key, sort_dir = parse_sort_spec(str(getattr(settings, "default_sort", "created-desc")))
    return ViewParams(
        filter=Filter.from_raw(getattr(settings, "default_filter", "all")),
        search_query="",
        sort_key=sort_key,
        sort_dir=sort_dir,
    )


def create_session(
    *,
    settings=None,
    blobs: BlobStore | None = None,
    surface: RenderSurface | None = None,
) -> TaskSession:
    """
    Build a TaskSession from the provided settings.

    Keeping settings (and the blob store) injectable makes the app easy to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if blobs is None:
        _ensure_local_dirs(settings)
        blobs = SqliteBlobStore(settings.store_path)

    persistence = TaskPersistence(blobs, key=settings.storage_key)
    store = TaskStore(persistence)

    session = TaskSession(
        store,
        params=initial_view_params(settings),
        surface=surface,
        confirm_destructive=bool(getattr(settings, "confirm_destructive", True)),
    )
    logger.info("Session ready tasks=%d key=%s", len(store), settings.storage_key)
    return session
