from __future__ import annotations


class FileLimitError(Exception):
    """Base error for anything filelimit raises on purpose."""


class ConfigError(FileLimitError):
    """Configuration could not be loaded or is invalid."""


class ConfigNotFoundError(ConfigError):
    """Configuration file does not exist."""


class ConfigParseError(ConfigError):
    """Configuration file is not a valid JSON object of the expected shape."""


class ConfigValidationError(ConfigError):
    """Configuration parsed but a field value is unacceptable."""


class ArgumentError(FileLimitError):
    """Malformed command-line invocation."""


class LoggerInitError(FileLimitError):
    """Audit log sink could not be created or opened."""
