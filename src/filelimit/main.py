#!/usr/bin/env python3
from __future__ import annotations

import sys

from filelimit.bootstrap import bootstrap_base_env, bootstrap_run_context
from filelimit.cli.common import CliParser
from filelimit.errors import ArgumentError, FileLimitError

TOOL_COMMANDS = ("logs", "env")


def build_tools_parser() -> CliParser:
    p = CliParser(prog="filelimit")
    sub = p.add_subparsers(dest="command", required=True)

    # Keep imports inside builder to avoid early side effects.
    from filelimit.cli.cli_env import build_env_parser
    from filelimit.cli.cli_logs import build_logs_parser

    build_env_parser(sub)
    build_logs_parser(sub)
    return p


def _is_tool_invocation(argv: list[str]) -> bool:
    # `filelimit logs 10` limits a directory named "logs".
    if not argv or argv[0] not in TOOL_COMMANDS:
        return False
    return len(argv) < 2 or not argv[1].lstrip("-").isdigit()


def _run_tool(argv: list[str]) -> int:
    args = build_tools_parser().parse_args(argv)

    if args.command == "env":
        from filelimit.cli.cli_env import handle_env

        return handle_env(args)

    if args.command == "logs":
        from filelimit.cli.cli_logs import handle_logs

        return handle_logs(args)

    raise RuntimeError(f"Unknown command: {args.command}")


def _run_cleanup(argv: list[str]) -> int:
    from filelimit.cli.cli_cleanup import (
        build_cleanup_parser,
        handle_cleanup,
        resolve_request,
        split_noui,
    )

    argv, noui_token = split_noui(argv)
    args = build_cleanup_parser().parse_args(argv)

    bootstrap_run_context(verbose=args.verbose, quiet=args.quiet or args.noui or noui_token)

    from filelimit.logger import init_logging, get_logger

    init_logging()
    log = get_logger("filelimit.main")

    request = resolve_request(args, noui_token=noui_token)
    log.debug(f"Request: {request}")
    return handle_cleanup(request)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    bootstrap_base_env()

    from filelimit.cli.cli_cleanup import USAGE
    from filelimit.logger import get_logger

    log = get_logger("filelimit.main")

    if not argv:
        print(USAGE)
        return 1

    try:
        if _is_tool_invocation(argv):
            return _run_tool(argv)
        return _run_cleanup(argv)
    except ArgumentError as e:
        print(f"Error: {e}")
        print()
        print(USAGE)
        return 1
    except FileLimitError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        log.debug("Unhandled error", exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
