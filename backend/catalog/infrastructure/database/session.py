"""Engine, declarative base and session dependencies for the catalog database."""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import DatabaseEngineOption, DatabaseSettings, settings


def build_engine(database: DatabaseSettings) -> AsyncEngine:
    """Create the async engine; connection pool sizing only applies to Postgres."""
    options: Dict[str, Any] = {"echo": database.DATABASE_ECHO}
    if database.DATABASE_ENGINE == DatabaseEngineOption.POSTGRES:
        options.update(
            pool_size=database.POSTGRES_POOL_SIZE,
            max_overflow=database.POSTGRES_MAX_OVERFLOW,
            pool_pre_ping=True,
        )
    return create_async_engine(database.DATABASE_URL, **options)


engine = build_engine(settings)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Declarative base; every model is also a dataclass built from its mapped columns."""


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, closed once the response has been produced."""
    async with local_session() as db:
        yield db


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Hand out the factory itself.

    A single ``AsyncSession`` cannot serve coroutines running concurrently,
    so handlers that fan lookups out open one session per lookup.
    """
    return local_session


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create any missing tables; existing ones are left untouched."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
