# src/focusflow/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.session import RenderModel, TaskRow, TaskSession
from ..tasks.task_models import Priority
from ..view.due_labels import DueStatus

logger = logging.getLogger(__name__)

_PRIORITY_BADGE = {
    Priority.HIGH: "High",
    Priority.MEDIUM: "Medium",
    Priority.LOW: "Low",
}

_DUE_MARK = {
    DueStatus.TODAY: "!",
    DueStatus.OVERDUE: "!!",
    DueStatus.FUTURE: "",
}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def format_row(index: int, row: TaskRow) -> str:
    task = row.task
    check = "x" if task.completed else " "
    sel = "*" if row.selected else " "
    parts = [f"{sel}{index:>3}. [{check}] {task.title}", f"({_PRIORITY_BADGE[task.priority]})"]
    if row.due_label is not None:
        parts.append(f"Due {row.due_label.label}{_DUE_MARK[row.due_label.status]}")
    try:
        parts.append(datetime.fromtimestamp(task.created_at / 1000).strftime("%H:%M"))
    except (OverflowError, OSError, ValueError):
        # createdAt from hand-edited storage can be out of range; just skip the time.
        logger.debug("Unrenderable created_at=%s id=%s", task.created_at, task.id)
    return "  ".join(parts)


def format_model(model: RenderModel) -> list[str]:
    p = model.params
    header = f"[filter: {p.filter} | sort: {p.sort_key}-{p.sort_dir}"
    if p.search_query.strip():
        header += f' | search: "{p.search_query.strip()}"'
    header += "]"

    lines = [header]
    if model.empty_hint:
        lines.append(f"  {model.empty_hint}")
    else:
        lines.extend(format_row(i, row) for i, row in enumerate(model.rows, start=1))

    flags = []
    if model.can_complete_selected:
        flags.append("/complete")
    if model.can_clear_completed:
        flags.append("/clear")
    footer = model.summary.text()
    if flags:
        footer += "  (" + ", ".join(flags) + ")"
    lines.append(footer)

    if model.pending is not None:
        lines.append(f"{model.pending.prompt} (/yes or /no)")
    return lines


class ConsoleRenderSurface:
    """
    Render surface that reprints the whole board on every change.

    `write` defaults to print; tests pass a list.append.
    """

    def __init__(self, write: Callable[[str], None] | None = None, *, enabled: bool = True) -> None:
        self._write = write or print
        self.enabled = enabled

    def render(self, model: RenderModel) -> None:
        if not self.enabled:
            return
        self._write("\n".join(format_model(model)))


def run_console_loop(session: TaskSession, registry: CommandRegistry | None = None) -> None:
    registry = registry or command_registry
    logger.info("Console connector started (tasks=%d).", len(session.store))
    _print_ts("[CONSOLE] Type a title to add a task. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    if session.surface is not None:
        session.surface.render(session.model())

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        # Plain text is the "new task" form: validated here, before it reaches the store.
        line = user_input if user_input.startswith("/") else f"/add {user_input}"

        try:
            cmd_response = registry.handle(session, line, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            _print_ts(cmd_response)

    logger.info("Console connector finished.")
