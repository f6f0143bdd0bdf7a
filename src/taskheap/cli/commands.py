# src/taskheap/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import add_task_from_input, format_task

Prompt = Callable[[str], str]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], Prompt | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Command registry used by connectors.

    Accepts "/name args" and bare menu numbers ("1".."5") registered as aliases.
    Commands registered with raw_args=True get the text after the name as a single
    argument, with its inner whitespace intact.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._raw_args: set[str] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_args: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for k in [key, *(a.lower() for a in aliases)]:
            self._handlers[k] = handler
            if raw_args:
                self._raw_args.add(k)

    def handle(
        self,
        state: AppState,
        line: str,
        ask: Prompt | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args" or a menu number like "3".
        Returns a reply string or None if the line is not a command.
        """
        line = line.strip()
        if line.startswith("/"):
            parts = line[1:].split(maxsplit=1)
            if not parts:
                return "Empty command. Use /help to list available commands."
        elif line.isdigit():
            parts = [line]
        else:
            return None

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""
        if name in self._raw_args:
            args = [rest.strip()] if rest.strip() else []
        else:
            args = rest.split()

        handler = self._handlers.get(name)
        if not handler:
            if line.isdigit():
                return "Invalid option."
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, ask)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit (menu option 6).")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str], ask: Prompt | None = None) -> str:
    """
    /add <description> | <priority> | <tag, tag>
    /add   -> prompts for each field (interactive only)
    """
    if args:
        fields = [f.strip() for f in args[0].split("|")]
        description = fields[0]
        priority_raw = fields[1] if len(fields) > 1 else ""
        tags_raw = fields[2] if len(fields) > 2 else ""
    elif ask is not None:
        description = ask("Description: ")
        priority_raw = ask("Priority (integer): ")
        tags_raw = ask("Tags (comma-separated): ")
    else:
        return "Usage: /add <description> | <priority> | <tag, tag>"

    with state.lock:
        task_id = add_task_from_input(
            state.task_store,
            description=description,
            priority_raw=priority_raw,
            tags_raw=tags_raw,
            default_priority=int(getattr(state.settings, "default_priority", 0)),
        )
    return f"Task added (id={task_id})."


def cmd_list(state: AppState, args: list[str]) -> str:
    with state.lock:
        tasks = state.task_store.list_tasks()
    if not tasks:
        return "No tasks available."
    lines = ["Tasks by priority:"]
    lines.extend(format_task(t) for t in tasks)
    return "\n".join(lines)


def cmd_next(state: AppState, args: list[str]) -> str:
    with state.lock:
        task = state.task_store.peek_next()
    if task is None:
        return "No tasks available."
    return f"Next task: {format_task(task)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    with state.lock:
        task = state.task_store.complete_next()
    if task is None:
        return "No tasks to complete."
    logger.info("Completed task priority=%s description=%r", task.priority, task.description)
    return f"Completed task: {format_task(task)}"


def cmd_tag(state: AppState, args: list[str], ask: Prompt | None = None) -> str:
    """
    /tag <tag>  -> tasks carrying exactly this tag
    /tag        -> prompts for the tag (interactive only)
    """
    if args:
        tag = args[0]
    elif ask is not None:
        tag = ask("Enter tag: ").strip()
    else:
        return "Usage: /tag <tag>"

    with state.lock:
        results = state.task_store.tasks_by_tag(tag)
    if not results:
        return f"No tasks found for tag '{tag}'."
    lines = [f"Tasks with tag '{tag}':"]
    lines.extend(format_task(t) for t in results)
    return "\n".join(lines)


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    with state.lock:
        nxt = store.peek_next()
        tags = ", ".join(store.tags()) or "-"
        count = store.count_tasks()
    return (
        "Status:\n"
        f"  Tasks: {count}\n"
        f"  Tags: {tags}\n"
        f"  Next: {format_task(nxt) if nxt is not None else '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add",
    cmd_add,
    help_text="Add task: /add <description> | <priority> | <tags>.",
    aliases=["1"],
    raw_args=True,
)
registry.register("list", cmd_list, help_text="Show tasks by priority.", aliases=["2"])
registry.register("next", cmd_next, help_text="View next task.", aliases=["3"])
registry.register("done", cmd_done, help_text="Complete next task.", aliases=["4"])
registry.register(
    "tag", cmd_tag, help_text="Search tasks by tag: /tag <tag>.", aliases=["5"], raw_args=True
)
registry.register("status", cmd_status, help_text="Show task count, tags and next task.")
