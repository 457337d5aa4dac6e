# src/focusflow/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the storage medium and the front end swappable and makes testing easier.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .session import RenderModel


class BlobStore(Protocol):
    """
    Opaque string-keyed blob store (local on-device storage).

    get() returns None for a missing key.
    set() overwrites; it may raise on failure (e.g. disk full), callers decide what to do.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class RenderSurface(Protocol):
    """
    Front-end port: receives the full render model after every recompute.

    No incremental diffing contract: the surface re-renders the whole list each time.
    """

    def render(self, model: RenderModel) -> None: ...
