"""Read-side book queries used by the author pages."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from .crud import book_crud
from .schemas import BookSummary


class BookService:
    """Service for looking up books that reference an author."""

    async def get_books_by_author(
        self,
        author_id: int,
        db: AsyncSession,
    ) -> List[BookSummary]:
        """Get every book written by an author, projected to title and summary.

        Args:
            author_id: Author whose books to fetch
            db: Database session

        Returns:
            Book summaries ordered by title
        """
        stmt = await book_crud.select(schema_to_select=BookSummary, sort_columns="title", author_id=author_id)
        result = await db.execute(stmt)
        return [BookSummary.model_validate(dict(row)) for row in result.mappings().all()]

    async def count_books_by_author(self, author_id: int, db: AsyncSession) -> int:
        return await book_crud.count(db=db, author_id=author_id)
