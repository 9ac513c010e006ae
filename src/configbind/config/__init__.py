"""Environment-backed runtime settings."""

from .runtime import (
    CONFIGURATION_FILE_ENV,
    LOG_APPEND_ENV,
    LOG_LEVEL_ENV,
    env_bool,
    env_str,
)

__all__ = [
    "CONFIGURATION_FILE_ENV",
    "LOG_APPEND_ENV",
    "LOG_LEVEL_ENV",
    "env_bool",
    "env_str",
]
