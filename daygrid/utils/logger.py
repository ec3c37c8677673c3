# File: daygrid/utils/logger.py
"""
Centralized logging configuration for daygrid.

Handlers live on the package logger ``daygrid`` only; every module and
class logger is a child of it and propagates there, so a host application
can re-route all daygrid output by configuring that one logger.

Environment:
    DAYGRID_LOG_LEVEL  console level name (default INFO)
    DAYGRID_LOG_DIR    directory for the daily debug log; empty disables it
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

ROOT_LOGGER = "daygrid"

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s'


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv("DAYGRID_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: Optional[int] = None,
                      log_dir: Optional[str] = None) -> logging.Logger:
    """
    Attach console and file handlers to the package logger.

    Args:
        level: Console level (default: DAYGRID_LOG_LEVEL or INFO)
        log_dir: Directory for the daily log file (default: DAYGRID_LOG_DIR
            or "logs"); an empty string disables the file handler

    Returns:
        The configured package logger
    """
    root = logging.getLogger(ROOT_LOGGER)

    # Prevent duplicate handlers
    if root.handlers:
        return root

    if level is None:
        level = _level_from_env()
    if log_dir is None:
        log_dir = os.getenv("DAYGRID_LOG_DIR", "logs")

    # The file handler records DEBUG even when the console is quieter
    root.setLevel(min(level, logging.DEBUG) if log_dir else level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    root.addHandler(console_handler)

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)

        log_file = path / f"daygrid_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        root.addHandler(file_handler)

    return root


def setup_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Return a logger inside the daygrid hierarchy.

    Names outside the package (e.g. a bare ``__name__`` of a test module)
    are nested under ``daygrid`` so they share its handlers.
    """
    configure_logging()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class LoggerMixin:
    """Mixin to add logging capability to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if not hasattr(self, '_logger'):
            self._logger = setup_logger(f"{ROOT_LOGGER}.{self.__class__.__name__}")
        return self._logger
