"""config.py

JSON configuration for a cleanup run.

    {
        // directory whose top-level files are limited
        "targetDirectory": "/var/app/artifacts",
        "maxFileCount": 100,
        "enableLogging": true,
    }

Keys are matched case-insensitively. `//` and `/* */` comments and trailing
commas are accepted. Unknown keys are ignored.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from filelimit.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from filelimit.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Configuration:
    target_directory: str = ""
    max_file_count: int = 0
    enable_logging: bool = True


# JSON key (lowercased) -> Configuration field
_FIELDS = {
    "targetdirectory": "target_directory",
    "maxfilecount": "max_file_count",
    "enablelogging": "enable_logging",
}


# ------------------------------------------------------------
# Lenient JSON
# ------------------------------------------------------------


def _strip_comments(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False

    while i < n:
        c = text[i]

        if in_string:
            out.append(c)
            if c == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if c == '"':
                in_string = False
            i += 1
            continue

        if c == '"':
            in_string = True
            out.append(c)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise ConfigParseError("Unterminated block comment")
            # keep line numbers stable for json error messages
            out.append("\n" * text.count("\n", i, end))
            i = end + 2
        else:
            out.append(c)
            i += 1

    return "".join(out)


def _strip_trailing_commas(text: str) -> str:
    out: list[str] = []
    i, n = 0, len(text)
    in_string = False

    while i < n:
        c = text[i]

        if in_string:
            out.append(c)
            if c == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if c == '"':
                in_string = False
            i += 1
            continue

        if c == '"':
            in_string = True
        elif c == ",":
            j = i + 1
            while j < n and text[j].isspace():
                j += 1
            if j < n and text[j] in "}]":
                i += 1
                continue

        out.append(c)
        i += 1

    return "".join(out)


def loads_lenient(text: str) -> Any:
    """json.loads that tolerates comments and trailing commas."""
    return json.loads(_strip_trailing_commas(_strip_comments(text)))


# ------------------------------------------------------------
# Loading / validation
# ------------------------------------------------------------


def _coerce(raw: dict, source: Path) -> Configuration:
    values: dict[str, Any] = {}
    for key, value in raw.items():
        field = _FIELDS.get(str(key).lower())
        if field is None:
            log.debug(f"Ignoring unknown config key: {key}")
            continue
        values[field] = value

    target = values.get("target_directory", "")
    if target is None:
        target = ""
    if not isinstance(target, str):
        raise ConfigParseError(
            f"Failed to parse configuration file: {source} (targetDirectory must be a string)"
        )

    if "max_file_count" not in values:
        raise ConfigValidationError("Configuration error: maxFileCount is required")

    count = values["max_file_count"]
    # bool is an int subclass; true/false is not a count
    if isinstance(count, bool) or not isinstance(count, int):
        raise ConfigParseError(
            f"Failed to parse configuration file: {source} (maxFileCount must be an integer)"
        )

    enable = values.get("enable_logging", True)
    if not isinstance(enable, bool):
        raise ConfigParseError(
            f"Failed to parse configuration file: {source} (enableLogging must be true or false)"
        )

    return Configuration(
        target_directory=target,
        max_file_count=count,
        enable_logging=enable,
    )


def validate_configuration(config: Configuration) -> None:
    if not config.target_directory.strip():
        raise ConfigValidationError(
            "Configuration error: targetDirectory cannot be empty"
        )

    if not Path(config.target_directory).is_dir():
        raise ConfigValidationError(
            f"Configuration error: Directory '{config.target_directory}' does not exist"
        )

    if config.max_file_count < 0:
        raise ConfigValidationError(
            "Configuration error: maxFileCount must be non-negative "
            f"(got {config.max_file_count})"
        )


def load_configuration(config_path: str | Path) -> Configuration:
    path = Path(config_path)
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        raw = loads_lenient(path.read_text(encoding="utf-8-sig"))
    except (json.JSONDecodeError, ConfigParseError) as e:
        raise ConfigParseError(
            f"Failed to parse configuration file: {path} ({e})"
        ) from e

    if not isinstance(raw, dict):
        raise ConfigParseError(f"Failed to parse configuration file: {path}")

    config = _coerce(raw, path)
    validate_configuration(config)

    log.debug(f"Loaded configuration from {path}: {config}")
    return config
