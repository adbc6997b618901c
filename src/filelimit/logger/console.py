from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from filelimit.env import get_logging_env


def build_console(file=None) -> Console:
    # Resolve the stream at call time so redirected stdout/stderr is honoured.
    return Console(file=file or sys.stdout, soft_wrap=True)


class ConsoleGateFilter(logging.Filter):
    """
    Drop diagnostic console output when quiet mode is enabled.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not get_logging_env().quiet


def build_console_handler(level: int = logging.NOTSET) -> logging.Handler:
    handler = RichHandler(
        console=build_console(sys.stderr),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)

    # RichHandler renders the level column itself.
    handler.setFormatter(logging.Formatter("%(message)s"))

    handler.addFilter(ConsoleGateFilter())
    return handler


class ConsoleMirrorHandler(logging.Handler):
    """
    Echo already-formatted lines to stdout verbatim.

    Used by the audit logger, where the console must show exactly what the
    file receives (no level column, no highlighting, no wrapping).
    """

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or build_console()

    def emit(self, record: logging.LogRecord) -> None:
        self.console.print(
            self.format(record),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
