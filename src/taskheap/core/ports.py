# src/taskheap/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the front-ends.

Commands and connectors depend on this Protocol instead of the concrete store,
which keeps them testable with fakes.
"""

from typing import Any, Iterable, Protocol


class TaskRepo(Protocol):
    # Mutations
    def add_task(self, description: str, priority: int, tags: Iterable[str] = ()) -> int: ...
    def complete_next(self) -> Any | None: ...

    # Queries
    def peek_next(self) -> Any | None: ...
    def list_tasks(self) -> list[Any]: ...
    def tasks_by_tag(self, tag: str) -> list[Any]: ...
    def count_tasks(self) -> int: ...
    def tags(self) -> list[str]: ...
