"""Root logger setup per environment, plus the request correlation ID.

- development / local: colored console, detailed layout
- staging: console in ``LOG_FORMAT``
- production: JSON console at WARNING, chatty library loggers quieted

Any environment can add a rotating structured log file with
``LOG_FILE_ENABLED``.
"""

import contextvars
import logging
import uuid
from typing import List, Optional

from ..config.settings import EnvironmentOption, Settings, get_settings
from .handlers import create_console_handler, create_file_handler, create_null_handler

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("correlation_id")

NOISY_LOGGERS = ("asyncpg", "aiosqlite", "sqlalchemy.engine", "sqlalchemy.pool", "uvicorn.access")


def _console_handler(settings: Settings) -> Optional[logging.Handler]:
    if not settings.LOG_CONSOLE_ENABLED:
        return None

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
        return create_console_handler(format_type="json", level=level, use_colors=False)

    if settings.ENVIRONMENT == EnvironmentOption.STAGING:
        return create_console_handler(format_type=settings.LOG_FORMAT, level=settings.LOG_LEVEL_INT, use_colors=False)

    level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
    return create_console_handler(format_type="detailed", level=level, use_colors=True)


def _file_handler(settings: Settings) -> Optional[logging.Handler]:
    if not settings.LOG_FILE_ENABLED:
        return None

    return create_file_handler(
        filepath=settings.LOG_FILE_PATH,
        max_bytes=settings.LOG_FILE_MAX_SIZE,
        backup_count=settings.LOG_FILE_BACKUP_COUNT,
    )


def setup_logging_configuration() -> None:
    """Replace the root logger's handlers with the ones the settings ask for."""
    settings = get_settings()

    handlers: List[logging.Handler] = [
        handler for handler in (_console_handler(settings), _file_handler(settings)) if handler is not None
    ]

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        if settings.LOG_CORRELATION_ID:
            handler.addFilter(CorrelationIdFilter())
        root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def configure_testing_logging() -> None:
    """Discard everything below ERROR, for test runs."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(create_null_handler())
    root_logger.setLevel(logging.ERROR)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the correlation ID of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "no-correlation"
        return True


def set_correlation_id(correlation_id: str) -> contextvars.Token[str]:
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: contextvars.Token[str]) -> None:
    correlation_id_var.reset(token)


def get_correlation_id() -> Optional[str]:
    return correlation_id_var.get(None)


def generate_correlation_id() -> str:
    return uuid.uuid4().hex[:8]
