"""Application settings.

Values come from the process environment first and then from a ``.env``
file (``CATALOG_ENV_FILE`` or ``.env`` at the repository root). Each concern
is a ``BaseSettings`` mixin; ``Settings`` combines them.
"""

import logging
import os
from enum import Enum
from typing import List

from pydantic_settings import BaseSettings
from starlette.config import Config

PACKAGE_DIR = os.path.abspath(os.path.join(os.path.dirname(os.path.realpath(__file__)), "..", ".."))
REPOSITORY_DIR = os.path.abspath(os.path.join(PACKAGE_DIR, "..", ".."))


def _locate_env_file() -> str:
    candidates = [
        os.environ.get("CATALOG_ENV_FILE", ""),
        os.path.join(REPOSITORY_DIR, ".env"),
        os.path.join(REPOSITORY_DIR, "backend", ".env"),
    ]
    for path in candidates:
        if path and os.path.isfile(path):
            return path
    return os.path.join(REPOSITORY_DIR, ".env")


config = Config(_locate_env_file())


class EnvironmentOption(str, Enum):
    PRODUCTION = "production"
    STAGING = "staging"
    DEVELOPMENT = "development"
    LOCAL = "local"


class DatabaseEngineOption(str, Enum):
    POSTGRES = "postgres"
    SQLITE = "sqlite"


class RuntimeSettings(BaseSettings):
    """Deployment environment and debug switch."""

    ENVIRONMENT: EnvironmentOption = config("ENVIRONMENT", default=EnvironmentOption.DEVELOPMENT, cast=EnvironmentOption)
    DEBUG: bool = config("DEBUG", default=False, cast=bool)


class DatabaseSettings(BaseSettings):
    """Catalog database: Postgres through asyncpg, or a SQLite file through aiosqlite."""

    DATABASE_ENGINE: DatabaseEngineOption = config(
        "DATABASE_ENGINE", default=DatabaseEngineOption.POSTGRES, cast=DatabaseEngineOption
    )
    DATABASE_ECHO: bool = config("DATABASE_ECHO", default=False, cast=bool)
    CREATE_TABLES_ON_STARTUP: bool = config("CREATE_TABLES_ON_STARTUP", default=True, cast=bool)

    POSTGRES_USER: str = config("POSTGRES_USER", default="postgres")
    POSTGRES_PASSWORD: str = config("POSTGRES_PASSWORD", default="postgres")
    POSTGRES_SERVER: str = config("POSTGRES_SERVER", default="localhost")
    POSTGRES_PORT: int = config("POSTGRES_PORT", default=5432, cast=int)
    POSTGRES_DB: str = config("POSTGRES_DB", default="local_library")
    POSTGRES_ASYNC_PREFIX: str = config("POSTGRES_ASYNC_PREFIX", default="postgresql+asyncpg://")
    POSTGRES_POOL_SIZE: int = config("POSTGRES_POOL_SIZE", default=10, cast=int)
    POSTGRES_MAX_OVERFLOW: int = config("POSTGRES_MAX_OVERFLOW", default=5, cast=int)

    SQLITE_URI: str = config("SQLITE_URI", default="./local_library.db")
    SQLITE_ASYNC_PREFIX: str = config("SQLITE_ASYNC_PREFIX", default="sqlite+aiosqlite:///")

    @property
    def DATABASE_URL(self) -> str:
        if self.DATABASE_ENGINE == DatabaseEngineOption.SQLITE:
            return f"{self.SQLITE_ASYNC_PREFIX}{self.SQLITE_URI}"
        return (
            f"{self.POSTGRES_ASYNC_PREFIX}{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


class HTTPSettings(BaseSettings):
    """JSON API prefix, middleware switches and OpenAPI document locations."""

    API_PREFIX: str = config("API_PREFIX", default="/api")

    CORS_ENABLED: bool = config("CORS_ENABLED", default=False, cast=bool)
    CORS_ORIGINS: str = config("CORS_ORIGINS", default="*")
    CORS_ALLOW_CREDENTIALS: bool = config("CORS_ALLOW_CREDENTIALS", default=False, cast=bool)
    CORS_ALLOW_METHODS: str = config("CORS_ALLOW_METHODS", default="GET,POST")
    CORS_ALLOW_HEADERS: str = config("CORS_ALLOW_HEADERS", default="*")

    GZIP_ENABLED: bool = config("GZIP_ENABLED", default=True, cast=bool)
    GZIP_MINIMUM_SIZE: int = config("GZIP_MINIMUM_SIZE", default=1000, cast=int)

    ENABLE_DOCS_IN_PRODUCTION: bool = config("ENABLE_DOCS_IN_PRODUCTION", default=False, cast=bool)
    DOCS_URL: str = config("DOCS_URL", default="/docs")
    REDOC_URL: str = config("REDOC_URL", default="/redoc")
    OPENAPI_URL: str = config("OPENAPI_URL", default="/openapi.json")

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        origins = [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
        return origins or ["*"]


class CatalogSettings(BaseSettings):
    """Site name and where the catalog pages, templates and static assets live."""

    APP_NAME: str = config("APP_NAME", default="Local Library")
    APP_DESCRIPTION: str = "Library catalog with server-rendered author management"
    VERSION: str = "0.1.0"

    CATALOG_PREFIX: str = config("CATALOG_PREFIX", default="/catalog")
    TEMPLATES_DIR: str = config("TEMPLATES_DIR", default=os.path.join(PACKAGE_DIR, "interfaces", "templates"))
    STATIC_DIR: str = config("STATIC_DIR", default=os.path.join(PACKAGE_DIR, "interfaces", "static"))


class LoggingSettings(BaseSettings):
    """Log level, output format and destinations."""

    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config("LOG_FORMAT", default="structured")  # simple, detailed, structured or json

    LOG_CONSOLE_ENABLED: bool = config("LOG_CONSOLE_ENABLED", default=True, cast=bool)
    LOG_FILE_ENABLED: bool = config("LOG_FILE_ENABLED", default=False, cast=bool)
    LOG_FILE_PATH: str = config("LOG_FILE_PATH", default="logs/local_library.log")
    LOG_FILE_MAX_SIZE: int = config("LOG_FILE_MAX_SIZE", default=5 * 1024 * 1024, cast=int)
    LOG_FILE_BACKUP_COUNT: int = config("LOG_FILE_BACKUP_COUNT", default=3, cast=int)

    LOG_CORRELATION_ID: bool = config("LOG_CORRELATION_ID", default=True, cast=bool)
    LOG_DEVELOPMENT_VERBOSE: bool = config("LOG_DEVELOPMENT_VERBOSE", default=True, cast=bool)
    LOG_PRODUCTION_OPTIMIZE: bool = config("LOG_PRODUCTION_OPTIMIZE", default=True, cast=bool)

    @property
    def LOG_LEVEL_INT(self) -> int:
        return logging.getLevelNamesMapping().get(self.LOG_LEVEL.upper(), logging.INFO)


class Settings(
    RuntimeSettings,
    DatabaseSettings,
    HTTPSettings,
    CatalogSettings,
    LoggingSettings,
):
    pass


settings = Settings()


def get_settings() -> Settings:
    return settings
