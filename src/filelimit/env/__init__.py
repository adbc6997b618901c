from filelimit.env.env import (
    Environment,
    LoggingEnvironment,
    get_env,
    reset_env_caches,
    get_logging_env,
)

from filelimit.env.paths import default_log_dir, timestamped_log_name

__all__ = [
    "Environment",
    "LoggingEnvironment",
    "get_env",
    "reset_env_caches",
    "get_logging_env",
    "default_log_dir",
    "timestamped_log_name",
]
