"""
filelimit CLI package.

Each module exposes argparse builders and handle_* functions returning an
exit code. No side effects at package import time.
"""
from __future__ import annotations

__all__ = [
    "cli_cleanup",
    "cli_env",
    "cli_logs",
]
