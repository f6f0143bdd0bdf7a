# src/taskheap/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

MENU = (
    "\n--- Task Manager ---\n"
    "1) Add task\n"
    "2) Show tasks by priority\n"
    "3) View next task\n"
    "4) Complete next task\n"
    "5) Search tasks by tag\n"
    "6) Exit"
)

EXIT_CHOICES = ("6", "/exit", "/quit")


def run_console_loop(
    state: AppState,
    *,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> None:
    logger.info("Console connector started.")
    show_menu = bool(getattr(state.settings, "show_menu", True))

    while True:
        if show_menu:
            output(MENU)
        try:
            choice = input_fn("Select an option: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output("")
            break

        if not choice:
            continue

        if choice.lower() in EXIT_CHOICES:
            logger.info("Console exit command received.")
            break

        # Handlers take state.lock around store calls only, never while prompting.
        try:
            response = command_registry.handle(state, choice, ask=input_fn)
        except (EOFError, KeyboardInterrupt):
            logger.info("Console input closed during a prompt, exiting.")
            break
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        output(response if response is not None else "Invalid option.")

    logger.info("Console connector finished.")
