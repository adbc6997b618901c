"""
filelimit: keep a directory under a maximum file count by deleting the
oldest files first.
"""
from __future__ import annotations

__version__ = "1.0.0"

APP_NAME = "FileLimitService"
