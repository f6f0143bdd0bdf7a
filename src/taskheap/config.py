# src/taskheap/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing is required at import time; every value has a default.

Variables:
- TASKHEAP_APP_NAME: display name (default: taskheap)
- TASKHEAP_LOG_LEVEL: console log level (default: WARNING)
- TASKHEAP_DATA_DIR: local directory for the log file (default: .local/taskheap)
- TASKHEAP_LOG_TO_FILE: also write DEBUG logs to <data_dir>/taskheap.log (default: false)
- TASKHEAP_DEFAULT_PRIORITY: priority used when input does not parse (default: 0)
- TASKHEAP_SHOW_MENU: print the numbered menu before each prompt (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKHEAP"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    # ---- Console behaviour ----
    default_priority: int
    show_menu: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskheap").strip() or "taskheap"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_to_file = _env_bool(_k("LOG_TO_FILE"), False)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskheap"))

        # Priorities are non-negative; a negative fallback would be rejected by the store.
        default_priority = max(0, _env_int(_k("DEFAULT_PRIORITY"), 0))
        show_menu = _env_bool(_k("SHOW_MENU"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_to_file=log_to_file,
            data_dir=data_dir,
            default_priority=default_priority,
            show_menu=show_menu,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
