"""bootstrap.py

Process bootstrap for filelimit.

Rules:
1) Only bootstrap mutates os.environ for shared run context.
2) Call bootstrap_base_env() once at the entrypoint.
3) Call bootstrap_run_context() after argparse parsing, before init_logging().
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from filelimit.env import reset_env_caches

_BOOTSTRAPPED = False


def bootstrap_base_env(env_file: str | Path = ".env") -> None:
    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return

    # Optional; existing variables always win.
    path = Path(env_file)
    if path.is_file():
        load_dotenv(path, override=False)

    os.environ.setdefault(
        "FILELIMIT_RUN_ID",
        datetime.now().strftime("%Y-%m-%d_%H-%M-%S"),
    )

    reset_env_caches()
    _BOOTSTRAPPED = True


def bootstrap_run_context(
    *,
    verbose: bool | None = None,
    quiet: bool | None = None,
) -> None:
    """Stamp run-scoped flags read by logging."""

    if verbose is not None:
        os.environ["FILELIMIT_VERBOSE"] = "1" if verbose else "0"
    if quiet is not None:
        os.environ["FILELIMIT_QUIET"] = "1" if quiet else "0"

    # Context changes must invalidate cached env views.
    reset_env_caches()
