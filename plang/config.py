from __future__ import annotations
import logging
import os

# Defaults
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_PROMPT = '> '
_DEFAULT_RECURSION_LIMIT = 10000


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None


def get_log_level(override: str | None = None) -> int:
    """Level from `override` (e.g. a command-line flag), else PLANG_LOG_LEVEL."""
    name = (override or str_from_env('PLANG_LOG_LEVEL', _DEFAULT_LOG_LEVEL)).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"PLANG_LOG_LEVEL must be a logging level name, got {name!r}")
    return level


def get_prompt() -> str:
    return str_from_env('PLANG_PROMPT', _DEFAULT_PROMPT)


def get_recursion_limit() -> int:
    return int_from_env('PLANG_RECURSION_LIMIT', _DEFAULT_RECURSION_LIMIT)
