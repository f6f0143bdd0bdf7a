# src/taskheap/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Task

logger = logging.getLogger(__name__)


def parse_priority(raw: str | None, default: int = 0) -> int:
    """
    Parse user-entered priority.

    Anything that is not a non-negative integer falls back to `default`
    instead of failing (the store never sees raw user text).
    """
    text = (raw or "").strip()
    try:
        value = int(text)
    except ValueError:
        logger.debug("Unparseable priority %r, using default=%s", raw, default)
        return default
    if value < 0:
        logger.debug("Negative priority %r, using default=%s", raw, default)
        return default
    return value


def parse_tags(raw: str | None) -> list[str]:
    """Comma-separated tags -> trimmed, non-empty tags (order and duplicates kept)."""
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def format_task(task: Task) -> str:
    return (
        f"Task(id={task.id}, description={task.description!r}, "
        f"priority={task.priority}, tags={task.tags!r})"
    )


def add_task_from_input(
    store: TaskRepo,
    *,
    description: str,
    priority_raw: str | None,
    tags_raw: str | None,
    default_priority: int = 0,
) -> int:
    """
    Convenience helper for front-ends: parse raw text fields and add the task.
    """
    return store.add_task(
        description.strip(),
        parse_priority(priority_raw, default=default_priority),
        parse_tags(tags_raw),
    )
