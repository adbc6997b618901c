from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from filelimit.cleanup import CleanupEngine
from filelimit.cli.common import CliParser
from filelimit.config import load_configuration
from filelimit.errors import ArgumentError
from filelimit.logger import (
    AuditLogger,
    ConsoleFileLogger,
    FileLogger,
    NullLogger,
    get_logger,
)

log = get_logger(__name__)

USAGE = """\
Usage:
  filelimit <target-directory> <max-file-count> [noui]
  filelimit --config <config-file-path> [noui]
  filelimit logs {list,show} ...
  filelimit env dump

Arguments:
  target-directory: Path to the directory to monitor
  max-file-count: Maximum number of files to keep in the directory
  --config: Path to JSON configuration file
  noui: (Optional) Suppress all console output and the log file"""

NOUI_TOKEN = "noui"

# options whose next argument is a value, never the noui token
_VALUE_OPTIONS = ("--config", "--log-file")

_COUNT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class CleanupRequest:
    target_directory: str
    max_file_count: int
    no_ui: bool = False
    dry_run: bool = False
    log_file: Optional[str] = None
    quiet: bool = False


def split_noui(argv: list[str]) -> tuple[list[str], bool]:
    """
    Strip the legacy `noui` token (any case) from the end of argv.

    It only counts after two leading arguments (`<dir> <count>` or
    `--config <path>`) and never as the value of an option, so a directory
    or file that happens to be called "noui" is left alone.
    """
    if len(argv) < 3 or argv[-1].lower() != NOUI_TOKEN:
        return list(argv), False
    if argv[-2] in _VALUE_OPTIONS:
        return list(argv), False
    return list(argv[:-1]), True


def build_cleanup_parser() -> argparse.ArgumentParser:
    p = CliParser(
        prog="filelimit",
        description="Delete the oldest files in a directory once it holds more than a maximum count.",
    )
    p.add_argument("target_directory", nargs="?", help="Directory to limit")
    p.add_argument("max_file_count", nargs="?", help="Maximum number of files to keep")
    p.add_argument("--config", metavar="PATH", help="JSON configuration file")
    p.add_argument(
        "--noui",
        action="store_true",
        help="Discard the audit log entirely (no console, no file)",
    )
    p.add_argument("--log-file", metavar="PATH", help="Write the audit log here")
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be deleted without deleting",
    )
    p.add_argument("--verbose", action="store_true", help="Diagnostic output")
    p.add_argument(
        "--quiet",
        action="store_true",
        help="No console output; the audit log file is still written",
    )
    return p


def _parse_count(raw: str) -> int:
    # ASCII digits only; int() would also take "1_000" and non-Latin digits
    if not _COUNT_RE.fullmatch(raw.strip()) or int(raw) < 0:
        raise ArgumentError("max-file-count must be a non-negative integer")
    return int(raw)


def resolve_request(args: argparse.Namespace, *, noui_token: bool = False) -> CleanupRequest:
    """
    Turn parsed arguments into a validated request.

    Raises ArgumentError or a ConfigError before any cleanup work starts.
    """
    no_ui = bool(args.noui or noui_token)

    if args.config:
        if args.target_directory or args.max_file_count:
            raise ArgumentError("--config cannot be combined with positional arguments")

        config = load_configuration(args.config)
        return CleanupRequest(
            target_directory=config.target_directory,
            max_file_count=config.max_file_count,
            # config can only turn logging off, never back on
            no_ui=no_ui or not config.enable_logging,
            dry_run=args.dry_run,
            log_file=args.log_file,
            quiet=args.quiet,
        )

    if args.target_directory is None or args.max_file_count is None:
        raise ArgumentError(
            "target-directory and max-file-count are required (or use --config)"
        )

    count = _parse_count(args.max_file_count)
    if not Path(args.target_directory).is_dir():
        raise ArgumentError(f"Directory '{args.target_directory}' does not exist")

    return CleanupRequest(
        target_directory=args.target_directory,
        max_file_count=count,
        no_ui=no_ui,
        dry_run=args.dry_run,
        log_file=args.log_file,
        quiet=args.quiet,
    )


def build_audit_logger(request: CleanupRequest) -> AuditLogger:
    if request.no_ui:
        return NullLogger()
    if request.quiet:
        return FileLogger(request.log_file)
    return ConsoleFileLogger(request.log_file)


def handle_cleanup(request: CleanupRequest) -> int:
    with build_audit_logger(request) as audit:
        if isinstance(audit, FileLogger):
            log.info(f"Audit log: {audit.log_file}")

        result = CleanupEngine(audit).cleanup(
            request.target_directory,
            request.max_file_count,
            dry_run=request.dry_run,
        )

    if result.failed_count:
        # Partial deletion is still a completed run.
        log.warning(
            f"{result.failed_count} file(s) could not be deleted; "
            f"{result.remaining_count} remain (limit {request.max_file_count})"
        )
    return 0
