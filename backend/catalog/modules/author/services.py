"""Author management service for the catalog."""

import asyncio
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...infrastructure.logging import get_logger
from ..book.schemas import BookSummary
from ..book.services import BookService
from ..common.exceptions import AuthorHasBooksError, AuthorNotFoundError
from .crud import author_crud
from .schemas import AuthorRead
from .validation import AuthorFormData

logger = get_logger(__name__)


class AuthorService:
    """Service for managing authors in the catalog.

    Wraps the author repository with the operations the author pages need:
    listing, lookup, lookup joined with the author's books, creation,
    update and guarded deletion.

    An author that is still referenced by a book is never deleted.
    """

    def __init__(self, book_service: Optional[BookService] = None):
        self.book_service = book_service or BookService()

    async def get_authors(self, db: AsyncSession) -> List[AuthorRead]:
        """Get all authors ordered by family name, then first name.

        Args:
            db: Database session

        Returns:
            Every author in the catalog
        """
        stmt = await author_crud.select(
            schema_to_select=AuthorRead,
            sort_columns=["family_name", "first_name"],
            sort_orders=["asc", "asc"],
        )
        result = await db.execute(stmt)
        return [AuthorRead.model_validate(dict(row)) for row in result.mappings().all()]

    async def get_author(
        self,
        author_id: int,
        db: AsyncSession,
    ) -> Optional[AuthorRead]:
        """Get a specific author.

        Args:
            author_id: Author ID to retrieve
            db: Database session

        Returns:
            Author data, or None if there is no such author
        """
        stmt = await author_crud.select(schema_to_select=AuthorRead, id=author_id)
        result = await db.execute(stmt)
        row = result.mappings().first()

        if not row:
            return None

        return AuthorRead.model_validate(dict(row))

    async def get_author_with_books(
        self,
        author_id: int,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> Tuple[Optional[AuthorRead], List[BookSummary]]:
        """Fetch an author and the author's books concurrently.

        Each lookup runs on its own session. Both must complete: the first
        failure cancels the other lookup and is raised to the caller.

        Args:
            author_id: Author ID to retrieve
            session_factory: Factory used to open one session per lookup

        Returns:
            Tuple of (author or None, book summaries)
        """

        async def fetch_author() -> Optional[AuthorRead]:
            async with session_factory() as db:
                return await self.get_author(author_id, db)

        async def fetch_books() -> List[BookSummary]:
            async with session_factory() as db:
                return await self.book_service.get_books_by_author(author_id, db)

        try:
            async with asyncio.TaskGroup() as group:
                author_task = group.create_task(fetch_author())
                books_task = group.create_task(fetch_books())
        except ExceptionGroup as failure:
            raise failure.exceptions[0]

        return author_task.result(), books_task.result()

    async def create_author(
        self,
        author_data: AuthorFormData,
        db: AsyncSession,
    ) -> AuthorRead:
        """Create a new author.

        Args:
            author_data: Validated form data
            db: Database session

        Returns:
            Created author data
        """
        created_author = await author_crud.create(
            db=db, object=author_data, schema_to_select=AuthorRead, return_as_model=True
        )
        author = AuthorRead.model_validate(created_author)

        logger.info(f"Author created: {author.full_name}", extra={"author_id": author.id})
        return author

    async def update_author(
        self,
        author_id: int,
        author_data: AuthorFormData,
        db: AsyncSession,
    ) -> AuthorRead:
        """Replace an author's fields with newly submitted data.

        Args:
            author_id: Author ID to update
            author_data: Validated form data
            db: Database session

        Returns:
            Updated author data

        Raises:
            AuthorNotFoundError: If there is no such author
        """
        if not await author_crud.exists(db=db, id=author_id):
            raise AuthorNotFoundError()

        await author_crud.update(db=db, object=author_data.model_dump(), id=author_id)

        updated = await self.get_author(author_id, db)
        if updated is None:
            raise AuthorNotFoundError()

        logger.info(f"Author updated: {updated.full_name}", extra={"author_id": author_id})
        return updated

    async def delete_author(
        self,
        author_id: int,
        db: AsyncSession,
        ensure_no_books: bool = True,
    ) -> bool:
        """Delete an author.

        Args:
            author_id: Author ID to delete
            db: Database session
            ensure_no_books: Refuse to delete while books reference the author

        Returns:
            True if a record was removed, False if it did not exist

        Raises:
            AuthorHasBooksError: If books still reference the author
        """
        if not await author_crud.exists(db=db, id=author_id):
            logger.info("Author already absent, nothing to delete", extra={"author_id": author_id})
            return False

        if ensure_no_books:
            book_count = await self.book_service.count_books_by_author(author_id, db)
            if book_count > 0:
                logger.warning(
                    "Refusing to delete author with books",
                    extra={"author_id": author_id, "book_count": book_count},
                )
                raise AuthorHasBooksError(author_id, book_count)

        await author_crud.delete(db=db, id=author_id)

        logger.info("Author deleted", extra={"author_id": author_id})
        return True
