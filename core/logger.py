"""
======================================================
Centralized logging configuration for named SQL store.
======================================================

Provides consistent logging setup for applications using the query store:
- Console output with optional ANSI colors
- Optional file output
- Level and destinations defaulting to core.config settings

Library modules never configure handlers themselves; they only call
logging.getLogger(__name__). Applications call setup_logging() once.

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> setup_logging(log_level='DEBUG', log_file='queries.log')
    >>> logger = get_logger(__name__)
    >>> logger.info("Query file loaded")
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from core.config import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output.

    Attributes:
        COLORS: Dict mapping log levels to ANSI color codes
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        """Format a record with its level name wrapped in color codes.

        The record is restored afterwards so other handlers sharing it
        (e.g. the file handler) still see the plain level name.
        """
        levelname = record.levelname
        color = self.COLORS.get(levelname)
        if color:
            record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional logging level override (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    if level:
        logger.setLevel(_resolve_level(level))

    return logger


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_dir: Optional[Union[str, Path]] = None,
    console_output: bool = True,
    use_colors: Optional[bool] = None
) -> None:
    """Setup centralized logging configuration.

    Configures the root logger with console and/or file handlers. Arguments
    left as None fall back to core.config logging settings.

    Args:
        log_level: Logging level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name (e.g., 'queries.log')
        log_dir: Optional log directory path
        console_output: If True, output to console (stdout)
        use_colors: If True, use colored output for console

    Example:
        >>> setup_logging(log_level='DEBUG', log_file='queries.log', log_dir='logs')
    """
    settings = config.logging
    level = _resolve_level(log_level or settings.level)
    log_file = log_file or settings.log_file
    use_colors = settings.use_colors if use_colors is None else use_colors

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        formatter_cls = ColoredFormatter if use_colors else logging.Formatter
        console_handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else settings.log_dir
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)
