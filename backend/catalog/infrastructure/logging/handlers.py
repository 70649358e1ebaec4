"""Handlers the logging setup attaches to the root logger."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, TextIO

from .formatters import get_formatter

LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET = "\033[0m"


class ColoredConsoleHandler(logging.StreamHandler):
    """Stdout handler that tints whole lines by level when writing to a terminal."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(stream or sys.stdout)
        isatty = getattr(self.stream, "isatty", None)
        self.use_colors = bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or color is None:
            return message
        return f"{color}{message}{RESET}"


def _configure(handler: logging.Handler, format_type: str, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(get_formatter(format_type))
    return handler


def create_console_handler(
    format_type: str = "detailed", level: int = logging.INFO, use_colors: bool = True
) -> logging.Handler:
    handler = ColoredConsoleHandler() if use_colors else logging.StreamHandler(sys.stdout)
    return _configure(handler, format_type, level)


def create_file_handler(
    filepath: str,
    format_type: str = "structured",
    level: int = logging.DEBUG,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> logging.Handler:
    """Rotating UTF-8 log file; its directory is created when missing."""
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(filepath, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    return _configure(handler, format_type, level)


def create_null_handler() -> logging.Handler:
    return logging.NullHandler()
