"""
Centralized logging configuration.

This module provides a single setup_logging function that configures
logging consistently for processes embedding configbind:
- Console output at the level named by CONFIGBIND_LOG_LEVEL (INFO by default)
- Optional file output to logs/{service_name}.log
- Fresh log file on each start unless LOG_APPEND=1
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional

from configbind.config import LOG_APPEND_ENV, LOG_LEVEL_ENV, env_bool, env_str
from configbind.exceptions import ConfigurationError

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_UNKNOWN_LOGGER_NAME = "<unknown>"
_LOG_FORMAT = "%(asctime)s%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level() -> int:
    level_name = (env_str(LOG_LEVEL_ENV, "INFO") or "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationError.invalid_format(LOG_LEVEL_ENV, level_name, "a logging level name")
    return level


def _close_handlers(logger: logging.Logger, logger_name: Optional[str] = None) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation  # policy_guard: allow-silent-handler
            safe_name = logger_name if logger_name else _UNKNOWN_LOGGER_NAME
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", safe_name, e)


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(level)
    return console_handler


def _configure_file_handler(service_name: Optional[str], logs_dir: Path) -> Optional[logging.Handler]:
    if not service_name:
        return None

    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"{service_name}.log"
    file_mode = "a" if env_bool(LOG_APPEND_ENV, or_value=False) else "w"

    file_handler = logging.FileHandler(log_path, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.INFO)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("redis").setLevel(logging.WARNING)
    logging.getLogger("redis.connection").setLevel(logging.WARNING)


def setup_logging(service_name: Optional[str] = None, logs_dir: Optional[Path] = None) -> None:
    """Configure the root logger; existing root handlers are closed and replaced."""

    with _config_lock:
        root_logger = logging.getLogger()
        level = _resolve_level()

        _close_handlers(root_logger)
        root_logger.handlers = []

        root_logger.addHandler(_build_console_handler(level))

        file_handler = _configure_file_handler(service_name, logs_dir if logs_dir else Path.cwd() / "logs")
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(level)
        _suppress_noisy_third_parties()


__all__ = ["setup_logging"]
