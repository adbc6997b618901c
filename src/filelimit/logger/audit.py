"""audit.py

Audit trail for cleanup runs.

Every line is "<YYYY-MM-DD HH:MM:SS> - <message>". Sinks:
- FileLogger: append to a file (explicit path or timestamped default)
- ConsoleFileLogger: the same, mirrored to stdout
- NullLogger: discard

Each instance owns a private, non-propagating stdlib logger so audit lines
never reach the diagnostic root handlers, and a lock so concurrent callers
never interleave.
"""

from __future__ import annotations

import itertools
import logging
import threading
from datetime import datetime
from pathlib import Path

from filelimit.env import default_log_dir, get_logging_env, timestamped_log_name
from filelimit.errors import LoggerInitError
from .console import ConsoleMirrorHandler
from .file import audit_formatter, build_file_handler
from .retention import enforce_retention

log = logging.getLogger(__name__)

_INSTANCE_IDS = itertools.count(1)


class AuditLogger:
    """A destination for audit lines."""

    def log(self, message: str) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class NullLogger(AuditLogger):
    def log(self, message: str) -> None:
        pass


class FileLogger(AuditLogger):
    def __init__(self, log_file: str | Path | None = None):
        self._lock = threading.Lock()
        self._log_file = self._resolve_log_file(log_file)

        self._logger = logging.getLogger(f"filelimit.audit.{next(_INSTANCE_IDS)}")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        try:
            self._logger.addHandler(build_file_handler(self._log_file))
        except OSError as e:
            raise LoggerInitError(
                f"Cannot open log file {self._log_file}: {e}"
            ) from e

        # Only the default directory is ours to prune.
        if log_file is None:
            enforce_retention(
                self._log_file.parent,
                get_logging_env().log_retention,
                pattern=timestamped_log_name("*"),
            )

        log.debug(f"Audit log: {self._log_file}")

    @staticmethod
    def _resolve_log_file(log_file: str | Path | None) -> Path:
        if log_file is not None:
            path = Path(log_file).expanduser()
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise LoggerInitError(
                    f"Cannot create log directory {path.parent}: {e}"
                ) from e
            return path

        log_dir = default_log_dir()
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LoggerInitError(f"Cannot create log directory {log_dir}: {e}") from e

        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return log_dir / timestamped_log_name(stamp)

    @property
    def log_file(self) -> Path:
        return self._log_file

    def log(self, message: str) -> None:
        with self._lock:
            self._logger.info(message)

    def close(self) -> None:
        with self._lock:
            for h in list(self._logger.handlers):
                self._logger.removeHandler(h)
                h.close()


class ConsoleFileLogger(FileLogger):
    def __init__(self, log_file: str | Path | None = None):
        super().__init__(log_file)

        mirror = ConsoleMirrorHandler()
        mirror.setFormatter(audit_formatter())
        self._logger.addHandler(mirror)
