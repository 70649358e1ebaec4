"""Build the FastAPI application: lifespan, middleware and docs endpoints."""

from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Optional

import anyio.to_thread
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from .config.settings import EnvironmentOption, Settings, get_settings
from .database.session import create_tables
from .logging import configure_logging, get_logger
from .logging.middleware import CorrelationIdMiddleware

logger = get_logger(__name__)

Lifespan = Callable[[FastAPI], AbstractAsyncContextManager[None]]


def lifespan_factory(settings: Settings, threadpool_tokens: int = 100) -> Lifespan:
    """Startup: configure logging, size the sync threadpool and ensure tables exist."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        configure_logging()
        anyio.to_thread.current_default_thread_limiter().total_tokens = threadpool_tokens

        if settings.CREATE_TABLES_ON_STARTUP:
            await create_tables()
            logger.info("Database tables ensured", extra={"database_engine": settings.DATABASE_ENGINE.value})

        yield

    return lifespan


def create_application(
    router: APIRouter,
    settings: Optional[Settings] = None,
    lifespan: Optional[Lifespan] = None,
    **kwargs: Any,
) -> FastAPI:
    """Create the application, include ``router`` and add the configured middleware.

    Args:
        router: Routes to include
        settings: Defaults to ``get_settings()``
        lifespan: Defaults to ``lifespan_factory(settings)``
        **kwargs: Passed to ``FastAPI``; ``title``, ``description`` and
            ``version`` fall back to the catalog settings

    Interactive docs are switched off in production unless
    ``ENABLE_DOCS_IN_PRODUCTION`` is set. The correlation ID middleware is
    added last so it wraps every other middleware.
    """
    settings = settings or get_settings()

    kwargs.setdefault("title", settings.APP_NAME)
    kwargs.setdefault("description", settings.APP_DESCRIPTION)
    kwargs.setdefault("version", settings.VERSION)

    show_docs = settings.ENVIRONMENT != EnvironmentOption.PRODUCTION or settings.ENABLE_DOCS_IN_PRODUCTION
    kwargs.update(
        docs_url=settings.DOCS_URL if show_docs else None,
        redoc_url=settings.REDOC_URL if show_docs else None,
        openapi_url=settings.OPENAPI_URL if show_docs else None,
    )

    application = FastAPI(lifespan=lifespan or lifespan_factory(settings), debug=settings.DEBUG, **kwargs)
    application.include_router(router)

    if settings.CORS_ENABLED:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS_LIST,
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=settings.CORS_ALLOW_METHODS.split(","),
            allow_headers=settings.CORS_ALLOW_HEADERS.split(","),
        )

    if settings.GZIP_ENABLED:
        application.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)

    if settings.LOG_CORRELATION_ID:
        application.add_middleware(CorrelationIdMiddleware)

    return application
