from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)


def enforce_retention(log_dir: Path, keep: int, *, pattern: str = "*.log") -> int:
    """
    Keep only the `keep` newest files matching `pattern` in `log_dir`.

    Returns how many files were removed. `keep <= 0` disables pruning.
    """
    if keep <= 0 or not log_dir.is_dir():
        return 0

    logs = sorted(
        (p for p in log_dir.glob(pattern) if p.is_file()),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    removed = 0
    for old in logs[keep:]:
        try:
            old.unlink()
            removed += 1
        except OSError as e:
            log.warning(f"Could not prune old log {old.name}: {e}")

    if removed:
        log.debug(f"Pruned {removed} old log file(s) from {log_dir}")
    return removed
