# src/focusflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskSession, then runs the console front end
in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_session
from ..config import get_settings
from ..connectors.console_connector import ConsoleRenderSurface, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(session) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        session.close()
    except Exception:
        logger.exception("Session close failed.")


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(settings)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    surface = ConsoleRenderSurface(enabled=settings.console_enabled)
    session = create_session(settings=settings, surface=surface)

    try:
        if settings.console_enabled:
            run_console_loop(session)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        _shutdown(session)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
