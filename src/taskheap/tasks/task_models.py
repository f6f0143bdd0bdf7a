# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field


class StoreInvariantError(RuntimeError):
    """Internal inconsistency between the task list and its derived views."""


@dataclass(slots=True)
class Task:
    id: int
    description: str
    priority: int
    tags: list[str] = field(default_factory=list)

    def copy(self) -> Task:
        return Task(
            id=self.id,
            description=self.description,
            priority=self.priority,
            tags=list(self.tags),
        )
