"""Logging helpers with consistent formatting."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from passentry.utils.env import get_bool_env, get_log_level_env

ROOT_LOGGER = "passentry"


def get_logger(name: str, level: Optional[int] = None, *, rich: Optional[bool] = None) -> logging.Logger:
    """Configure and return a logger namespaced under ``passentry``.

    ``level`` defaults to ``PASSENTRY_LOG_LEVEL`` and ``rich`` to
    ``PASSENTRY_RICH_LOGS``. Output goes to stderr so it never mixes with
    command output.
    """
    qualified = name if name.split(".", 1)[0] == ROOT_LOGGER else f"{ROOT_LOGGER}.{name}"
    logger = logging.getLogger(qualified)
    if logger.handlers:
        return logger

    if level is None:
        level = get_log_level_env("PASSENTRY_LOG_LEVEL", default=logging.INFO)
    if rich is None:
        rich = get_bool_env("PASSENTRY_RICH_LOGS", default=True)

    logger.setLevel(level)

    if rich:
        handler: logging.Handler = RichHandler(
            level=level,
            console=Console(stderr=True),
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            show_time=True,
            show_path=False,
        )
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    logger.propagate = False
    return logger


def set_level(level: int) -> None:
    """Change the level of every ``passentry`` logger created so far."""
    for name, candidate in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(candidate, logging.Logger):
            continue
        if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
            continue
        candidate.setLevel(level)
        for handler in candidate.handlers:
            handler.setLevel(level)
