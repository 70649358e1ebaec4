"""Logging for the catalog: environment-aware setup and request correlation IDs.

    from catalog.infrastructure.logging import get_logger

    logger = get_logger()
    logger.info("Author created", extra={"author_id": author.id})
"""

from .config import (
    CorrelationIdFilter,
    configure_testing_logging,
    generate_correlation_id,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from .factory import configure_logging, get_logger, mark_logging_configured

__all__ = [
    "CorrelationIdFilter",
    "configure_logging",
    "configure_testing_logging",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger",
    "mark_logging_configured",
    "reset_correlation_id",
    "set_correlation_id",
]
