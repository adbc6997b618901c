from __future__ import annotations

import os
import sys
from pathlib import Path

from filelimit import APP_NAME

# ---------------------------------------------------------------------
# Platform log directories
# ---------------------------------------------------------------------

LINUX_SYSTEM_LOGS_DIR = Path("/var/log") / APP_NAME


def _windows_logs_dir() -> Path:
    base = os.environ.get("LOCALAPPDATA")
    root = Path(base) if base else Path.home() / "AppData" / "Local"
    return root / APP_NAME / "Logs"


def _linux_fallback_logs_dir() -> Path:
    return Path.home() / ".local" / "share" / APP_NAME / "logs"


def _writable(path: Path) -> bool:
    # nearest existing ancestor decides whether mkdir could succeed
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate.is_dir() and os.access(candidate, os.W_OK | os.X_OK)
    return False


def _linux_logs_dir(create: bool) -> Path:
    """
    /var/log when writable, otherwise the user's XDG-style data dir.

    With `create`, the system directory is made here so the permission check
    is real; without it the decision is made from filesystem permissions only.
    """
    if not create:
        # an existing directory is what mkdir(exist_ok=True) would accept too
        if LINUX_SYSTEM_LOGS_DIR.is_dir() or _writable(LINUX_SYSTEM_LOGS_DIR):
            return LINUX_SYSTEM_LOGS_DIR
        return _linux_fallback_logs_dir()

    try:
        LINUX_SYSTEM_LOGS_DIR.mkdir(parents=True, exist_ok=True)
        return LINUX_SYSTEM_LOGS_DIR
    except OSError:
        return _linux_fallback_logs_dir()


def _other_logs_dir() -> Path:
    return Path.home() / f".{APP_NAME}" / "logs"


# ---------------------------------------------------------------------
# Public paths
# ---------------------------------------------------------------------


def default_log_dir(platform: str | None = None, *, create: bool = True) -> Path:
    """
    Resolve the directory audit logs go to when no explicit log file is given.

    FILELIMIT_LOGS_DIR overrides the platform choice everywhere. Read-only
    callers pass `create=False` so resolution never touches the filesystem.
    """
    raw = os.environ.get("FILELIMIT_LOGS_DIR")
    if raw:
        return Path(raw).expanduser().resolve()

    platform = platform or sys.platform
    if platform.startswith("win"):
        return _windows_logs_dir()
    if platform.startswith("linux"):
        return _linux_logs_dir(create)
    return _other_logs_dir()


def timestamped_log_name(stamp: str) -> str:
    return f"{APP_NAME}_{stamp}.log"
