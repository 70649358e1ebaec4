"""Create the catalog tables in the configured database.

Usage (from ``backend/``):

    DATABASE_ENGINE=sqlite python -m scripts.create_tables
"""

import asyncio
import sys

from sqlalchemy.exc import SQLAlchemyError

from catalog.infrastructure.config import get_settings
from catalog.infrastructure.database.session import Base, create_tables
from catalog.infrastructure.logging import get_logger
from catalog.modules.author.models import Author  # noqa: F401
from catalog.modules.book.models import Book  # noqa: F401

logger = get_logger(__name__)


async def main() -> int:
    engine_name = get_settings().DATABASE_ENGINE.value
    tables = sorted(Base.metadata.tables)

    try:
        await create_tables()
    except (OSError, SQLAlchemyError):
        logger.exception("Could not create tables", extra={"database_engine": engine_name})
        return 1

    logger.info(f"Tables ready: {', '.join(tables)}", extra={"database_engine": engine_name})
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
