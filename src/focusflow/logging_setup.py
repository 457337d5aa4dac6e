# src/focusflow/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

# Loggers that fire on every keystroke-level intent; on a shared terminal they
# would interleave with the reprinted board.
BOARD_CHATTY_PREFIXES = (
    "focusflow.connectors.",
    "focusflow.core.session",
    "focusflow.tasks.",
    "focusflow.storage.",
)


class _BoardNoiseFilter(logging.Filter):
    """
    Console filter for the focusflow terminal.

    While the board is drawn on the same terminal, per-intent chatter
    (store writes, renders, connector events) is held back below WARNING.
    Third-party loggers and captured Python warnings only pass at ERROR+.
    """

    def __init__(self, *, board_shares_terminal: bool) -> None:
        super().__init__()
        self.board_shares_terminal = board_shares_terminal

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "focusflow" or name.startswith("focusflow."):
            if self.board_shares_terminal and name.startswith(BOARD_CHATTY_PREFIXES):
                return record.levelno >= logging.WARNING
            return True

        return record.levelno >= logging.ERROR


def _level(raw: Any, default: int) -> int:
    if isinstance(raw, int):
        return raw
    level = logging.getLevelName(str(raw or "").strip().upper())
    return level if isinstance(level, int) else default


def log_file_for(settings: Any) -> Path:
    """Log file path: explicit `log_file`, else `<data_dir>/<app_name>.log`."""
    explicit = getattr(settings, "log_file", None)
    if explicit:
        return Path(explicit)
    data_dir = Path(getattr(settings, "data_dir", ".local/focusflow"))
    return data_dir / f"{getattr(settings, 'app_name', 'focusflow') or 'focusflow'}.log"


def setup_logging(settings: Any) -> Path:
    """
    Configure root logging from settings and return the log file path.

    Console (stderr) runs at `settings.log_level` through _BoardNoiseFilter;
    the file always gets DEBUG. Call once, before the first log line.
    """
    console_level = _level(getattr(settings, "log_level", "INFO"), logging.INFO)
    log_file = log_file_for(settings)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(
        _BoardNoiseFilter(board_shares_terminal=bool(getattr(settings, "console_enabled", True)))
    )
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
