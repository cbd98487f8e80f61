"""
Logging utilities.

WHAT: Centralized logging configuration for the assistant
WHY: Engine decisions and conversation turns share one format
HOW: Stdlib logging, console handler always, file handler when LOG_FILE is set
"""

import logging
import sys
from pathlib import Path

from ..core.config import settings

CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(pathname)s:%(lineno)d - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Configure the root logger.

    WHAT: Install console (and optionally file) handlers on the root logger
    WHY: Every module logs through get_logger(__name__) and inherits this setup
    HOW: Clear existing handlers, then attach handlers built from settings

    Args:
        level: Override for settings.LOG_LEVEL
        log_file: Override for settings.LOG_FILE; empty string disables file output
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    target_file = settings.LOG_FILE if log_file is None else log_file

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name, logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if target_file:
        path = Path(target_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    root_logger.info(f"Logging initialized (level={level_name}, file={target_file or 'disabled'})")


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (typically called with __name__)."""
    return logging.getLogger(name)
