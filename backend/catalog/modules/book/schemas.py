"""Pydantic schemas for book entities."""

from pydantic import BaseModel, ConfigDict, computed_field

from ...infrastructure.config.settings import get_settings


class BookSummary(BaseModel):
    """Book projected to the fields an author page lists."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    summary: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return f"{get_settings().CATALOG_PREFIX}/book/{self.id}"
