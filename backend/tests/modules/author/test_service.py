"""Tests for author service."""

import asyncio
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.modules.author.services import AuthorService
from catalog.modules.author.validation import AuthorFormData
from catalog.modules.book.services import BookService
from catalog.modules.common.exceptions import AuthorHasBooksError, AuthorNotFoundError


@pytest.fixture
def author_service():
    """Create author service instance."""
    return AuthorService()


@pytest.mark.asyncio
async def test_create_author(author_service: AuthorService, db_session: AsyncSession):
    """Test creating a new author."""
    author_data = AuthorFormData(first_name="Patrick", family_name="Rothfuss", date_of_birth=date(1973, 6, 6))

    result = await author_service.create_author(author_data=author_data, db=db_session)

    assert result.id is not None
    assert result.first_name == "Patrick"
    assert result.family_name == "Rothfuss"
    assert result.date_of_birth == date(1973, 6, 6)
    assert result.date_of_death is None
    assert result.full_name == "Rothfuss, Patrick"
    assert result.url == f"/catalog/author/{result.id}"
    assert result.lifespan == "Jun 6, 1973 - "


@pytest.mark.asyncio
async def test_get_author(author_service: AuthorService, db_session: AsyncSession, test_author: dict):
    """Test getting a specific author."""
    result = await author_service.get_author(author_id=test_author["id"], db=db_session)

    assert result is not None
    assert result.id == test_author["id"]
    assert result.full_name == "Asimov, Isaac"
    assert result.date_of_birth_formatted == "Jan 2, 1920"
    assert result.date_of_death_formatted == "Apr 6, 1992"
    assert result.lifespan == "Jan 2, 1920 - Apr 6, 1992"


@pytest.mark.asyncio
async def test_get_author_not_found(author_service: AuthorService, db_session: AsyncSession):
    """Test getting non-existent author."""
    result = await author_service.get_author(author_id=99999, db=db_session)
    assert result is None


@pytest.mark.asyncio
async def test_get_authors_ordering(author_service: AuthorService, db_session: AsyncSession):
    """Test authors are ordered by family name and then first name."""
    for first_name, family_name in [("Zed", "Bova"), ("Isaac", "Asimov"), ("Ben", "Bova")]:
        await author_service.create_author(AuthorFormData(first_name=first_name, family_name=family_name), db_session)

    result = await author_service.get_authors(db=db_session)

    assert [author.full_name for author in result] == ["Asimov, Isaac", "Bova, Ben", "Bova, Zed"]


@pytest.mark.asyncio
async def test_get_authors_empty(author_service: AuthorService, db_session: AsyncSession):
    """Test listing an empty catalog."""
    assert await author_service.get_authors(db=db_session) == []


@pytest.mark.asyncio
async def test_get_author_with_books(
    author_service: AuthorService,
    session_factory: async_sessionmaker[AsyncSession],
    test_author: dict,
    test_book: dict,
    test_book_2: dict,
):
    """Test the author and the author's books are fetched together."""
    author, books = await author_service.get_author_with_books(test_author["id"], session_factory)

    assert author is not None
    assert author.id == test_author["id"]
    assert [book.title for book in books] == ["Foundation", "The Gods Themselves"]


@pytest.mark.asyncio
async def test_get_author_with_books_no_books(
    author_service: AuthorService,
    session_factory: async_sessionmaker[AsyncSession],
    test_author_without_books: dict,
):
    """Test an author without books yields an empty book list."""
    author, books = await author_service.get_author_with_books(test_author_without_books["id"], session_factory)

    assert author is not None
    assert books == []


@pytest.mark.asyncio
async def test_get_author_with_books_missing_author(
    author_service: AuthorService, session_factory: async_sessionmaker[AsyncSession]
):
    """Test a missing author is reported as None rather than an error."""
    author, books = await author_service.get_author_with_books(99999, session_factory)

    assert author is None
    assert books == []


class FailingBookService(BookService):
    async def get_books_by_author(self, author_id, db):
        raise RuntimeError("book store unavailable")


@pytest.mark.asyncio
async def test_get_author_with_books_propagates_failure(
    session_factory: async_sessionmaker[AsyncSession], test_author: dict
):
    """Test a failing lookup fails the whole fetch."""
    author_service = AuthorService(book_service=FailingBookService())

    with pytest.raises(RuntimeError, match="book store unavailable"):
        await author_service.get_author_with_books(test_author["id"], session_factory)


class SlowAuthorService(AuthorService):
    def __init__(self):
        super().__init__(book_service=FailingBookService())
        self.author_lookup_cancelled = False

    async def get_author(self, author_id, db):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            self.author_lookup_cancelled = True
            raise
        return None


@pytest.mark.asyncio
async def test_get_author_with_books_cancels_pending_lookup(
    session_factory: async_sessionmaker[AsyncSession], test_author: dict
):
    """Test a failing lookup cancels the one still running before the error is raised."""
    author_service = SlowAuthorService()

    with pytest.raises(RuntimeError, match="book store unavailable"):
        await author_service.get_author_with_books(test_author["id"], session_factory)

    assert author_service.author_lookup_cancelled is True


@pytest.mark.asyncio
async def test_update_author(author_service: AuthorService, db_session: AsyncSession, test_author: dict):
    """Test replacing an author's fields."""
    author_data = AuthorFormData(first_name="Isaak", family_name="Ozimov")

    result = await author_service.update_author(test_author["id"], author_data, db_session)

    assert result.id == test_author["id"]
    assert result.first_name == "Isaak"
    assert result.family_name == "Ozimov"
    assert result.date_of_birth is None
    assert result.date_of_death is None

    stored = await author_service.get_author(test_author["id"], db_session)
    assert stored.full_name == "Ozimov, Isaak"


@pytest.mark.asyncio
async def test_update_author_not_found(author_service: AuthorService, db_session: AsyncSession):
    """Test updating non-existent author."""
    with pytest.raises(AuthorNotFoundError):
        await author_service.update_author(99999, AuthorFormData(first_name="A", family_name="B"), db_session)


@pytest.mark.asyncio
async def test_delete_author(author_service: AuthorService, db_session: AsyncSession, test_author_without_books: dict):
    """Test deleting an author nothing references."""
    result = await author_service.delete_author(test_author_without_books["id"], db_session)

    assert result is True
    assert await author_service.get_author(test_author_without_books["id"], db_session) is None


@pytest.mark.asyncio
async def test_delete_author_not_found(author_service: AuthorService, db_session: AsyncSession):
    """Test deleting an absent author is a no-op."""
    assert await author_service.delete_author(99999, db_session) is False


@pytest.mark.asyncio
async def test_delete_author_with_books(
    author_service: AuthorService, db_session: AsyncSession, test_author: dict, test_book: dict
):
    """Test an author with books is kept."""
    with pytest.raises(AuthorHasBooksError) as exc_info:
        await author_service.delete_author(test_author["id"], db_session)

    assert exc_info.value.author_id == test_author["id"]
    assert exc_info.value.book_count == 1
    assert await author_service.get_author(test_author["id"], db_session) is not None
