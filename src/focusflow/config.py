# src/focusflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is read from disk at import time except the optional .env file.
- Components receive settings by injection; get_settings() is only for the composition root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "FOCUSFLOW"

DEFAULT_STORAGE_KEY = "focusflow.todos.v1"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Front end ----
    console_enabled: bool
    confirm_destructive: bool

    # ---- View defaults (not persisted) ----
    default_filter: str
    default_sort: str

    # ---- Local data (ignored by git) ----
    data_dir: Path
    store_path: Path
    storage_key: str
    log_file: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _first_env(_k("APP_NAME"), default="focusflow") or "focusflow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)
        confirm_destructive = _env_bool(_k("CONFIRM_DESTRUCTIVE"), True)

        default_filter = _env(_k("DEFAULT_FILTER"), "all").strip().lower() or "all"
        default_sort = _env(_k("DEFAULT_SORT"), "created-desc").strip().lower() or "created-desc"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/focusflow"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "blobs.sqlite3")
        storage_key = (_first_env(_k("STORAGE_KEY"), default=DEFAULT_STORAGE_KEY) or "").strip()
        log_file = _env_path(_k("LOG_FILE"), data_dir / "focusflow.log")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            confirm_destructive=confirm_destructive,
            default_filter=default_filter,
            default_sort=default_sort,
            data_dir=data_dir,
            store_path=store_path,
            storage_key=storage_key or DEFAULT_STORAGE_KEY,
            log_file=log_file,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
