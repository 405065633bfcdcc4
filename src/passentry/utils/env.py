"""Environment helper utilities."""

from __future__ import annotations

import logging
import os


_FALSE_VALUES = {"0", "false", "no", "off"}


def get_bool_env(name: str, *, default: bool = False) -> bool:
    """Return True/False for an environment flag."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if not value:
        return default
    return value not in _FALSE_VALUES


def get_log_level_env(name: str, *, default: int = logging.INFO) -> int:
    """
    Read a logging level from the environment.

    Accepts level names (``debug``, ``WARNING``) or numeric values; anything
    else falls back to ``default``.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default
