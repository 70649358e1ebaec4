"""``get_logger``: named loggers, with the root logger configured on first use."""

import inspect
import logging
from threading import Lock
from typing import Optional, Union

from ..config.settings import get_settings
from .config import setup_logging_configuration

_configured = False
_configure_lock = Lock()


def configure_logging(force: bool = False) -> None:
    """Install the handlers for the current environment.

    Runs once; later calls are no-ops unless ``force`` is set.
    """
    global _configured

    with _configure_lock:
        if _configured and not force:
            return
        setup_logging_configuration()
        _configured = True

    settings = get_settings()
    logging.getLogger(__name__).info(
        "Logging configured",
        extra={
            "environment": settings.ENVIRONMENT.value,
            "log_level": settings.LOG_LEVEL,
            "log_format": settings.LOG_FORMAT,
        },
    )


def mark_logging_configured() -> None:
    """Keep ``get_logger`` from replacing handlers someone else installed."""
    global _configured
    _configured = True


def get_logger(name: Optional[str] = None, **context) -> Union[logging.Logger, logging.LoggerAdapter]:
    """Return the logger for ``name``, defaulting to the calling module's name.

    Keyword arguments are attached to every record the returned logger emits:

        logger = get_logger(component="ui")
        logger.info("Form rejected", extra={"error_count": 2})
    """
    if not _configured:
        configure_logging()

    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        name = str(caller.f_globals.get("__name__", "catalog")) if caller is not None else "catalog"
        del frame, caller

    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, context) if context else logger
