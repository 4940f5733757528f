"""
Logging setup for the daily tracker.

setup_logging() is called once by entry points (web server, CLI); library
modules only ask get_logger() for a child of the "daily_tracker" logger.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from tracker.config_manager import config
from tracker.paths import LOGS_DIR

ROOT_LOGGER_NAME = "daily_tracker"

FILE_FORMAT = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
CONSOLE_FORMAT = logging.Formatter("[%(levelname)s] %(message)s")


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(FILE_FORMAT)
    return handler


def setup_logging(
    log_level: int = logging.INFO,
    console_level: int = logging.WARNING,
    logs_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Route tracker logs to system.log, error.log (ERROR+) and stderr.

    Args:
        log_level: level for system.log
        console_level: level for stderr
        logs_dir: where the log files go, <project_root>/logs by default

    Returns:
        The "daily_tracker" logger. Calling this again replaces its handlers.
    """
    logs_dir = logs_dir or LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    logger.addHandler(_rotating_handler(logs_dir / "system.log", log_level))
    logger.addHandler(_rotating_handler(logs_dir / "error.log", logging.ERROR))

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(CONSOLE_FORMAT)
    logger.addHandler(console_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return "daily_tracker.<name>", or the project logger itself."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
