from __future__ import annotations

import logging

from filelimit.env import get_logging_env
from .audit import AuditLogger, ConsoleFileLogger, FileLogger, NullLogger
from .console import build_console_handler
from .retention import enforce_retention
from . import state as _state

__all__ = [
    "AuditLogger",
    "ConsoleFileLogger",
    "FileLogger",
    "NullLogger",
    "enforce_retention",
    "get_logger",
    "init_logging",
]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.WARNING


def init_logging() -> None:
    """
    Initialize diagnostic logging for the process.

    - Only the filelimit package logger gets a handler (Rich, stderr).
    - Audit loggers are separate and never propagate here.
    - Safe to call multiple times; the level is refreshed, handlers are not stacked.
    """
    env = get_logging_env()

    pkg = logging.getLogger("filelimit")
    level = logging.DEBUG if env.verbose else _level_to_int(env.log_level)
    pkg.setLevel(level)

    if _state.INITIALIZED and _state.CONSOLE_HANDLER is not None:
        _state.CONSOLE_HANDLER.setLevel(level)
        return

    handler = build_console_handler(level)
    pkg.addHandler(handler)
    _state.CONSOLE_HANDLER = handler
    pkg.propagate = False
    _state.INITIALIZED = True
