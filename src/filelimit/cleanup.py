from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional

from filelimit.logger import AuditLogger, FileLogger, get_logger

log = get_logger(__name__)


# ============================================================
# Models
# ============================================================


@dataclass(frozen=True)
class FileRecord:
    name: str
    path: Path
    modified: datetime

    @classmethod
    def from_entry(cls, entry: os.DirEntry) -> "FileRecord":
        st = entry.stat()
        return cls(
            name=entry.name,
            path=Path(entry.path),
            modified=datetime.fromtimestamp(st.st_mtime),
        )

    def age(self, now: datetime) -> timedelta:
        return now - self.modified


@dataclass
class CleanupResult:
    initial_count: int = 0
    deleted_count: int = 0
    failed_count: int = 0
    oldest_age: Optional[timedelta] = None
    newest_age: Optional[timedelta] = None
    deleted: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def remaining_count(self) -> int:
        return self.initial_count - self.deleted_count


# ============================================================
# Helpers
# ============================================================


def format_age(age: timedelta) -> str:
    seconds = age.total_seconds()
    if seconds >= 86400:
        return f"{seconds / 86400:.2f} days"
    if seconds >= 3600:
        return f"{seconds / 3600:.2f} hours"
    if seconds >= 60:
        return f"{seconds / 60:.2f} minutes"
    return f"{seconds:.2f} seconds"


def list_files(directory: Path) -> list[FileRecord]:
    """Regular files directly under `directory`, in listing order."""
    records: list[FileRecord] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if not entry.is_file(follow_symlinks=False):
                continue
            try:
                records.append(FileRecord.from_entry(entry))
            except FileNotFoundError:
                # removed between listing and stat
                log.debug(f"Vanished during scan: {entry.name}")
    return records


def deletion_order(files: list[FileRecord]) -> list[FileRecord]:
    """Oldest first; equal timestamps fall back to name."""
    return sorted(files, key=lambda f: (f.modified, f.name))


# ============================================================
# Engine
# ============================================================


class CleanupEngine:
    def __init__(
        self,
        logger: AuditLogger | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.logger = logger if logger is not None else FileLogger()
        self._now = clock

    def cleanup(
        self,
        target_directory: str | Path,
        max_file_count: int,
        *,
        dry_run: bool = False,
    ) -> CleanupResult:
        audit = self.logger.log
        directory = Path(target_directory)
        result = CleanupResult(dry_run=dry_run)

        audit(
            f"Starting cleanup - Target Directory: {target_directory}, "
            f"Max File Count: {max_file_count}"
        )
        if dry_run:
            audit("Dry run - no files will be deleted")

        files = list_files(directory)
        result.initial_count = len(files)
        audit(f"Current file count: {result.initial_count}")

        if not files:
            audit("No files found in directory")
            return result

        oldest = min(files, key=lambda f: f.modified)
        newest = max(files, key=lambda f: f.modified)
        now = self._now()
        result.oldest_age = oldest.age(now)
        result.newest_age = newest.age(now)
        audit(f"Oldest file age: {format_age(result.oldest_age)}")
        audit(f"Newest file age: {format_age(result.newest_age)}")

        if result.initial_count <= max_file_count:
            audit("File count within limit. No files deleted.")
            audit("Files deleted: 0")
            return result

        to_delete = result.initial_count - max_file_count
        log.debug(f"{to_delete} file(s) over the limit in {directory}")

        for record in deletion_order(files)[:to_delete]:
            age = format_age(record.age(self._now()))

            if dry_run:
                result.deleted.append(record.name)
                audit(f"Would delete: {record.name} (Age: {age})")
                continue

            try:
                record.path.unlink()
            except OSError as e:
                result.failed_count += 1
                audit(f"Error deleting {record.name}: {e.strerror or e}")
                continue

            result.deleted_count += 1
            result.deleted.append(record.name)
            audit(f"Deleted: {record.name} (Age: {age})")

        if dry_run:
            audit(f"Files that would be deleted: {len(result.deleted)}")
            audit("Files deleted: 0")
        else:
            audit(f"Files deleted: {result.deleted_count}")
        audit(f"Cleanup completed. Remaining files: {result.remaining_count}")
        return result
