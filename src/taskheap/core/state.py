# src/taskheap/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .ports import TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    task_store: TaskRepo

    # One coarse lock for the whole store: front-ends hold it around every call.
    lock: threading.RLock = field(default_factory=threading.RLock)
