# src/focusflow/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import cast

from ..core.session import TaskSession
from ..tasks.task_models import Priority, Task
from ..view.view_engine import Filter

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[TaskSession, list[str]], str]
CommandHandler3 = Callable[[TaskSession, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        session: TaskSession,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(session, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(session, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def resolve_task(session: TaskSession, ref: str) -> Task | None:
    """
    "3"      -> third row of the current view (1-based)
    "a1b2"   -> task whose id starts with the prefix (must be unique)
    """
    ref = (ref or "").strip()
    if not ref:
        return None
    if ref.isdigit():
        view = session.view()
        n = int(ref)
        return view[n - 1] if 1 <= n <= len(view) else None
    matches = [t for t in session.store.tasks() if t.id.startswith(ref)]
    return matches[0] if len(matches) == 1 else None


def parse_due(raw: str) -> date | None:
    """ISO date or "none"/"-" to clear. Raises ValueError on anything else."""
    if raw.lower() in ("none", "-", ""):
        return None
    return date.fromisoformat(raw)


def parse_add_args(args: list[str]) -> tuple[str, date | None, Priority | None]:
    """
    /add Buy milk !high due:2026-10-19

    "!<priority>" and "due:<date>" tokens may appear anywhere; the rest is the title.
    """
    title_words: list[str] = []
    due: date | None = None
    priority: Priority | None = None
    for word in args:
        low = word.lower()
        if low.startswith("!") and low[1:] in {p.value for p in Priority}:
            priority = Priority(low[1:])
        elif low.startswith("due:"):
            due = parse_due(word[4:])
        else:
            title_words.append(word)
    return " ".join(title_words), due, priority


def _task_label(task: Task) -> str:
    return f'"{task.title}"'


def cmd_help(session: TaskSession, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(session: TaskSession, args: list[str]) -> str:
    try:
        title, due, priority = parse_add_args(args)
    except ValueError:
        return "Invalid due date. Use due:YYYY-MM-DD."
    if not title.strip():
        return "Usage: /add <title> [!low|!medium|!high] [due:YYYY-MM-DD]"
    task = session.add_task(title, due=due, priority=priority)
    return f"Added {_task_label(task)}."


def cmd_done(session: TaskSession, args: list[str]) -> str:
    if not args:
        first = session.toggle_first_visible()
        return f"Toggled {_task_label(first)}." if first else "Nothing to toggle."
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    session.toggle_completed(task.id)
    return f"{_task_label(task)} marked {'active' if task.completed else 'completed'}."


def cmd_edit(session: TaskSession, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /edit <n> <new title>"
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    if session.edit_title(task.id, " ".join(args[1:])):
        return "Title updated."
    return "Title unchanged."


def cmd_prio(session: TaskSession, args: list[str]) -> str:
    if len(args) < 2 or args[1].lower() not in {p.value for p in Priority}:
        return "Usage: /prio <n> low|medium|high"
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    session.set_priority(task.id, args[1].lower())
    return f"{_task_label(task)} priority set to {args[1].lower()}."


def cmd_due(session: TaskSession, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /due <n> YYYY-MM-DD|none"
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    try:
        due = parse_due(args[1])
    except ValueError:
        return "Invalid due date. Use YYYY-MM-DD or none."
    session.set_due(task.id, due)
    return f"{_task_label(task)} due {due.isoformat() if due else 'cleared'}."


def cmd_del(session: TaskSession, args: list[str]) -> str:
    if not args:
        return "Usage: /del <n>"
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    pending = session.request_delete(task.id)
    if pending is None:
        return f"Deleted {_task_label(task)}."
    return f"{pending.prompt} (/yes or /no)"


def cmd_clear(session: TaskSession, args: list[str]) -> str:
    if not session.model().can_clear_completed:
        return "No completed tasks."
    pending = session.request_clear_completed()
    if pending is None:
        return "Completed tasks cleared."
    return f"{pending.prompt} (/yes or /no)"


def cmd_yes(session: TaskSession, args: list[str]) -> str:
    return "Done." if session.confirm() else "Nothing to confirm."


def cmd_no(session: TaskSession, args: list[str]) -> str:
    return "Cancelled." if session.abort() else "Nothing to cancel."


def cmd_sel(session: TaskSession, args: list[str]) -> str:
    if not args:
        return f"{len(session.selection)} selected."
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    selected = session.toggle_selection(task.id)
    return f"{_task_label(task)} {'selected' if selected else 'deselected'}."


def cmd_complete(session: TaskSession, args: list[str]) -> str:
    if not session.model().can_complete_selected:
        return "Nothing selected."
    n = session.complete_selected()
    return f"Completed {n} task(s)."


def _move_usage() -> str:
    return "Usage: /move <n> <position>"


def cmd_move(session: TaskSession, args: list[str]) -> str:
    """
    /move <n> <position>  -> put task at 1-based position in the manual order
    """
    if len(args) < 2:
        return _move_usage()
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    try:
        position = int(args[1])
    except ValueError:
        return _move_usage()
    if session.reorder(task.id, position - 1):
        return f"Moved {_task_label(task)} to position {position}."
    return f"Position {position} is out of range."


def _cmd_shift(session: TaskSession, args: list[str], delta: int) -> str:
    if not args:
        return "Usage: /up <n> or /down <n>"
    task = resolve_task(session, args[0])
    if task is None:
        return f"No task {args[0]}."
    if session.move_by_delta(task.id, delta):
        return f"Moved {_task_label(task)} {'up' if delta < 0 else 'down'}."
    return "Already at the edge."


def cmd_up(session: TaskSession, args: list[str]) -> str:
    return _cmd_shift(session, args, -1)


def cmd_down(session: TaskSession, args: list[str]) -> str:
    return _cmd_shift(session, args, 1)


def cmd_filter(session: TaskSession, args: list[str]) -> str:
    if not args or args[0].lower() not in {f.value for f in Filter}:
        return f"Filter is {session.params.filter}. Use /filter all|active|completed."
    session.set_filter(args[0].lower())
    return f"Filter: {session.params.filter}."


def cmd_search(session: TaskSession, args: list[str]) -> str:
    """
    /search           -> clear search
    /search <text>    -> case-insensitive title search
    """
    query = " ".join(args)
    session.set_search(query)
    return f'Search: "{query}".' if query.strip() else "Search cleared."


def cmd_sort(session: TaskSession, args: list[str]) -> str:
    if not args:
        return (
            f"Sort is {session.params.sort_key}-{session.params.sort_dir}. "
            "Use /sort created|due|priority-asc|desc."
        )
    session.set_sort_spec(args[0])
    return f"Sort: {session.params.sort_key}-{session.params.sort_dir}."


def cmd_list(session: TaskSession, args: list[str]) -> str:
    summary = session.model().summary.text()
    logger.debug("List requested (visible=%d)", len(session.view()))
    return summary


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <title> [!low|!medium|!high] [due:YYYY-MM-DD]."
)
registry.register("done", cmd_done, help_text="Toggle completed: /done <n> (no n: first visible).")
registry.register("edit", cmd_edit, help_text="Rename a task: /edit <n> <new title>.")
registry.register("prio", cmd_prio, help_text="Set priority: /prio <n> low|medium|high.")
registry.register("due", cmd_due, help_text="Set due date: /due <n> YYYY-MM-DD|none.")
registry.register("del", cmd_del, help_text="Delete a task (asks to confirm): /del <n>.", aliases=["rm"])
registry.register("clear", cmd_clear, help_text="Clear completed tasks (asks to confirm).")
registry.register("yes", cmd_yes, help_text="Confirm the pending action.", aliases=["y"])
registry.register("no", cmd_no, help_text="Cancel the pending action.", aliases=["n"])
registry.register("sel", cmd_sel, help_text="Toggle selection: /sel <n>.")
registry.register("complete", cmd_complete, help_text="Complete all selected tasks.")
registry.register("move", cmd_move, help_text="Move in manual order: /move <n> <position>.")
registry.register("up", cmd_up, help_text="Move a task up one place: /up <n>.")
registry.register("down", cmd_down, help_text="Move a task down one place: /down <n>.")
registry.register("filter", cmd_filter, help_text="Filter: /filter all|active|completed.")
registry.register("search", cmd_search, help_text="Search titles: /search <text> (empty clears).")
registry.register("sort", cmd_sort, help_text="Sort: /sort created|due|priority-asc|desc.")
registry.register("list", cmd_list, help_text="Show the summary line.", aliases=["ls"])
