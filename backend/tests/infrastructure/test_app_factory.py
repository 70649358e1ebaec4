"""Tests for building the application from settings."""

from fastapi import APIRouter
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from catalog.infrastructure.app_factory import create_application
from catalog.infrastructure.config import EnvironmentOption, get_settings
from catalog.infrastructure.logging.middleware import CorrelationIdMiddleware


def _middleware_classes(app):
    return [middleware.cls for middleware in app.user_middleware]


def test_defaults_come_from_settings():
    app = create_application(APIRouter())

    assert app.title == "Local Library"
    assert app.docs_url == "/docs"
    assert GZipMiddleware in _middleware_classes(app)
    assert CorrelationIdMiddleware in _middleware_classes(app)
    assert CORSMiddleware not in _middleware_classes(app)


def test_docs_hidden_in_production():
    settings = get_settings().model_copy(update={"ENVIRONMENT": EnvironmentOption.PRODUCTION})

    app = create_application(APIRouter(), settings=settings)

    assert app.docs_url is None
    assert app.redoc_url is None
    assert app.openapi_url is None


def test_docs_can_be_enabled_in_production():
    settings = get_settings().model_copy(
        update={"ENVIRONMENT": EnvironmentOption.PRODUCTION, "ENABLE_DOCS_IN_PRODUCTION": True}
    )

    app = create_application(APIRouter(), settings=settings)

    assert app.docs_url == "/docs"


def test_optional_middleware():
    settings = get_settings().model_copy(
        update={"CORS_ENABLED": True, "GZIP_ENABLED": False, "LOG_CORRELATION_ID": False}
    )

    app = create_application(APIRouter(), settings=settings, title="Catalog under test")

    assert app.title == "Catalog under test"
    assert _middleware_classes(app) == [CORSMiddleware]
