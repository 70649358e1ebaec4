"""SQLAlchemy models for book entities."""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin
from ...infrastructure.database.session import Base


class Book(Base, TimestampMixin):
    """Book model.

    Books are owned by the wider catalog; the author pages only read them
    to show a bibliography and to refuse deleting an author that is still
    referenced.
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, init=False)
    title: Mapped[str] = mapped_column(String(255), index=True)
    summary: Mapped[str] = mapped_column(Text)
    author_id: Mapped[int] = mapped_column(Integer, ForeignKey("authors.id"), index=True)
    isbn: Mapped[Optional[str]] = mapped_column(String(20), default=None)
