# tasks/task_store.py

from __future__ import annotations

import heapq
import logging
from collections.abc import Iterable

from .task_models import StoreInvariantError, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store.

    Keeps three views in sync:
    - self._tasks: dense list of records, the source of truth
    - self._queue: heap of (-priority, id) entries (max priority on top)
    - self._tag_index: tag -> ids of tasks carrying that tag

    Ids are positions in self._tasks. Completing a task removes it from the
    list and renumbers the survivors, so ids are not stable across removals.
    Among equal priorities the lower id comes first.

    Thread-safety:
    - none; callers sharing a store must hold one lock around every call
    """

    def __init__(self) -> None:
        self._tasks: list[Task] = []
        self._queue: list[tuple[int, int]] = []
        self._tag_index: dict[str, list[int]] = {}
        logger.info("TaskStore ready (in-memory)")

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- validation ----

    @staticmethod
    def _check_priority(priority: int) -> None:
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ValueError(f"priority must be an integer, got {priority!r}")
        if priority < 0:
            raise ValueError(f"priority must be non-negative, got {priority}")

    @staticmethod
    def _check_tags(tags: list[str]) -> None:
        for tag in tags:
            if not isinstance(tag, str) or not tag or tag != tag.strip():
                raise ValueError(f"tags must be non-empty trimmed strings, got {tag!r}")

    # ---- index maintenance ----

    def _index(self, task: Task) -> None:
        heapq.heappush(self._queue, (-task.priority, task.id))
        for tag in task.tags:
            ids = self._tag_index.setdefault(tag, [])
            # A tag repeated within one task is indexed once.
            if not ids or ids[-1] != task.id:
                ids.append(task.id)

    def _rebuild(self) -> None:
        """Renumber every task by position and rebuild both views from scratch."""
        self._queue.clear()
        self._tag_index.clear()
        for new_id, task in enumerate(self._tasks):
            task.id = new_id
            self._index(task)
        logger.debug(
            "TaskStore rebuilt tasks=%d tags=%d", len(self._tasks), len(self._tag_index)
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._tasks)

    def tags(self) -> list[str]:
        """Tags carried by at least one stored task, sorted."""
        return sorted(self._tag_index)

    def add_task(self, description: str, priority: int, tags: Iterable[str] = ()) -> int:
        if isinstance(tags, str):
            raise ValueError(f"tags must be a collection of strings, not a string: {tags!r}")
        tag_list = list(tags)
        self._check_priority(priority)
        self._check_tags(tag_list)

        task = Task(
            id=len(self._tasks),
            description=description,
            priority=priority,
            tags=tag_list,
        )
        self._tasks.append(task)
        self._index(task)
        logger.debug("Task added id=%s priority=%s tags=%s", task.id, priority, tag_list)
        return task.id

    def peek_next(self) -> Task | None:
        """Highest-priority task without removing it, or None when empty."""
        if not self._queue:
            return None
        _, task_id = self._queue[0]
        return self._tasks[task_id].copy()

    def complete_next(self) -> Task | None:
        """
        Remove and return the highest-priority task.

        The returned task keeps its pre-removal id, which is no longer valid:
        the remaining tasks are renumbered by the rebuild.
        """
        if not self._queue:
            return None

        _, task_id = heapq.heappop(self._queue)
        if not 0 <= task_id < len(self._tasks) or self._tasks[task_id].id != task_id:
            self._rebuild()
            raise StoreInvariantError(f"priority queue referenced missing task id={task_id}")

        task = self._tasks.pop(task_id)
        self._rebuild()
        logger.debug("Task completed id=%s priority=%s", task.id, task.priority)
        return task.copy()

    def list_tasks(self) -> list[Task]:
        """All tasks by descending priority, lower id first among equals."""
        ordered = sorted(self._tasks, key=lambda t: (-t.priority, t.id))
        return [t.copy() for t in ordered]

    def tasks_by_tag(self, tag: str) -> list[Task]:
        """Tasks indexed under `tag` (exact match), in index order."""
        return [self._tasks[i].copy() for i in self._tag_index.get(tag, [])]

    def check_invariants(self) -> None:
        """Raise StoreInvariantError if the views disagree with the task list."""
        for pos, task in enumerate(self._tasks):
            if task.id != pos:
                raise StoreInvariantError(f"task at position {pos} has id={task.id}")

        expected_queue = sorted((-t.priority, t.id) for t in self._tasks)
        if sorted(self._queue) != expected_queue:
            raise StoreInvariantError("priority queue does not match stored tasks")

        expected_index: dict[str, list[int]] = {}
        for task in self._tasks:
            for tag in dict.fromkeys(task.tags):
                expected_index.setdefault(tag, []).append(task.id)
        if self._tag_index != expected_index:
            raise StoreInvariantError("tag index does not match stored tasks")
