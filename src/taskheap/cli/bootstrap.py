# src/taskheap/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes settings and wires a fresh
TaskStore into AppState. Every call builds an independent store, so tests
and embedders never share state.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(settings=settings, task_store=TaskStore())
    logger.debug("AppState created app=%s", getattr(settings, "app_name", "taskheap"))
    return state
