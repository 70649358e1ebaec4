"""Column mixins shared by the catalog tables."""

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column


def utc_now() -> datetime:
    return datetime.now(UTC)


class TimestampMixin(MappedAsDataclass):
    """Adds timezone-aware ``created_at`` and ``updated_at`` columns.

    Neither column is a constructor argument. ``updated_at`` moves forward on
    every UPDATE, whether it goes through the ORM unit of work or through
    FastCRUD, which stamps the column itself.
    """

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), init=False, default_factory=utc_now)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), init=False, default_factory=utc_now, onupdate=utc_now
    )
