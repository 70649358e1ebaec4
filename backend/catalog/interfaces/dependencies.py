"""FastAPI dependencies for use in route handlers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..infrastructure.database import async_session, get_session_factory
from ..modules.author.services import AuthorService

DbSession = Annotated[AsyncSession, Depends(async_session)]
SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]


def get_author_service() -> AuthorService:
    """Dependency for providing an AuthorService instance."""
    return AuthorService()


AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
