"""Loguru sinks for the access services."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(level: str = "INFO", log_file: str | None = None) -> None:
    """Replace loguru's default sink with a console sink and an optional daily file.

    Args:
        level: Minimum level for every sink
        log_file: Path of a log file rotated daily and kept for a week
    """
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_path, format=FILE_FORMAT, level=level, rotation="1 day", retention="7 days")

    logger.info(f"Logger initialized with level={level}, log_file={log_file}")
