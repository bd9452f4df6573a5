from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_FILE_NAME = "rusteria_todos.json"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODO_FILE: path of the JSON todo file. Default 'rusteria_todos.json' in the working directory
    - TODO_LOG_LEVEL: logging level name such as DEBUG or INFO (default: WARNING)
    - TODO_VERBOSE: 'true' to show item ids in listings by default (default: false)
    """

    todo_file: str
    log_level: str
    verbose: bool


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value.strip() == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        # Fallback to the default if the name is not a known level
        return DEFAULT_LOG_LEVEL
    return level


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    return Settings(
        todo_file=_get_env("TODO_FILE", DEFAULT_FILE_NAME).strip(),
        log_level=_parse_log_level(_get_env("TODO_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        verbose=_parse_bool(_get_env("TODO_VERBOSE", "false"), False),
    )
