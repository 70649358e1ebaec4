"""Tests for mapping errors to HTTP responses."""

from typing import Any, Dict

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from catalog.interfaces.dependencies import get_author_service
from catalog.interfaces.main import app
from catalog.modules.author.services import AuthorService
from catalog.modules.common.exceptions import AuthorHasBooksError, AuthorNotFoundError, DomainError, ResourceNotFoundError
from catalog.modules.common.utils.error_handler import map_exception


@pytest.mark.parametrize(
    "error,status_code",
    [
        (AuthorNotFoundError(), 404),
        (ResourceNotFoundError("gone"), 404),
        (AuthorHasBooksError(1, 2), 409),
        (DomainError("other"), 500),
    ],
)
def test_map_exception(error, status_code):
    assert map_exception(error).status_code == status_code


def test_map_exception_keeps_message():
    http_exception = map_exception(AuthorHasBooksError(3, 2))

    assert http_exception.detail == "Author 3 still has 2 book(s) and cannot be deleted"


class BrokenAuthorService(AuthorService):
    async def get_authors(self, db):
        raise OperationalError("SELECT", {}, Exception("database is locked"))


@pytest.fixture
def broken_author_service(client: AsyncClient):
    app.dependency_overrides[get_author_service] = lambda: BrokenAuthorService()
    yield
    app.dependency_overrides.pop(get_author_service, None)


@pytest.mark.asyncio
async def test_data_access_error_renders_error_page(client: AsyncClient, broken_author_service):
    response = await client.get("/catalog/authors")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("text/html")
    assert "Internal server error" in response.text


@pytest.mark.asyncio
async def test_domain_error_page_title(client: AsyncClient, test_author: Dict[str, Any]):
    response = await client.get(f"/catalog/author/{test_author['id'] + 1}/update")

    assert response.status_code == 404
    assert "<title>Error | Local Library</title>" in response.text
