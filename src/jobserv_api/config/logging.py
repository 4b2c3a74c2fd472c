"""
Centralized logging configuration.

Provides bootstrap_logging for entry points (invoke tasks, test suites) to
configure logging consistently using Python's native INI format. Library
modules only ever call logging.getLogger(__name__).
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    Looks for logging.ini in the current working directory, then falls back to
    the copy shipped with the package.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    current_dir_config = Path('logging.ini')
    if current_dir_config.exists():
        return current_dir_config

    package_config = Path(__file__).parent / 'logging.ini'
    if package_config.exists():
        return package_config

    return None


def _get_log_level() -> str:
    """Return the LOG_LEVEL environment override, defaulting to INFO."""
    log_level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()
    if log_level not in _LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', using INFO", file=sys.stderr)
        return 'INFO'
    return log_level


def bootstrap_logging(name: Optional[str] = None) -> None:
    """
    Bootstrap logging configuration using Python's native INI format.

    Loads logging.ini with logging.config.fileConfig(), then applies the
    LOG_LEVEL environment variable to the root logger, its stream handlers and
    the jobserv_api logger. Falls back to basicConfig when no usable INI file
    exists.

    Args:
        name: Optional name for the logger reporting the configuration
    """
    level = getattr(logging, _get_log_level())
    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(level=level, format='%(levelname)s: %(name)s: %(message)s', stream=sys.stderr)
        return

    try:
        logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
    except (OSError, KeyError, ValueError) as e:
        print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        logging.basicConfig(level=level, format='%(levelname)s: %(name)s: %(message)s', stream=sys.stderr)
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            handler.setLevel(level)
    logging.getLogger('jobserv_api').setLevel(level)

    logging.getLogger(name).debug(f"Logging configured for {name or 'root logger'} from {config_path}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name, ensuring logging is bootstrapped.

    Args:
        name: Name for the logger

    Returns:
        Configured logger instance
    """
    bootstrap_logging()
    return logging.getLogger(name)
