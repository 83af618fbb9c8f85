"""Loguru setup for the memosync CLI."""

import os
import sys
from pathlib import Path

from loguru import logger

from memosync.utils.helpers import ensure_dir

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{function}:{line} | {message}"


def setup_logging(level: str | None = None, log_file: Path | None = None) -> None:
    """
    Route log records to stderr and, optionally, a rotating file.

    Args:
        level: Console level; falls back to ``LOG_LEVEL`` and then ``INFO``.
        log_file: Keep a DEBUG-level sync history here as well.
    """
    if level is None:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True, diagnose=False)

    if log_file is not None:
        log_file = Path(log_file).expanduser()
        ensure_dir(log_file.parent)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="1 MB",
            retention=5,
            encoding="utf-8",
            diagnose=False,
        )
