from __future__ import annotations

import logging
from pathlib import Path

AUDIT_FORMAT = "%(asctime)s - %(message)s"
AUDIT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class StrictFileHandler(logging.FileHandler):
    """
    FileHandler that lets write failures reach the caller.

    The stock handler reports emit() errors to stderr and carries on; an
    audit trail that silently stops recording is worse than a failed run.
    """

    def handleError(self, record: logging.LogRecord) -> None:
        raise


def audit_formatter() -> logging.Formatter:
    return logging.Formatter(AUDIT_FORMAT, datefmt=AUDIT_DATEFMT)


def build_file_handler(logfile: Path) -> logging.FileHandler:
    logfile.parent.mkdir(parents=True, exist_ok=True)

    handler = StrictFileHandler(logfile, mode="a", encoding="utf-8")
    handler.setLevel(logging.NOTSET)
    handler.setFormatter(audit_formatter())
    return handler
