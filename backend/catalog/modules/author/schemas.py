"""Pydantic schemas for author entities."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ...infrastructure.config.settings import get_settings
from ..common.schemas import TimestampSchema


def format_date_medium(value: Optional[date]) -> str:
    """Format a date as e.g. ``Jan 2, 1900``; empty string for None."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


class AuthorBase(BaseModel):
    """Base schema for author data."""

    first_name: str = Field(max_length=100)
    family_name: str = Field(max_length=100)
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None


class AuthorRead(TimestampSchema, AuthorBase):
    """Schema for reading author data, with the fields views derive from it."""

    model_config = ConfigDict(from_attributes=True)

    id: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def full_name(self) -> str:
        if not self.first_name or not self.family_name:
            return ""
        return f"{self.family_name}, {self.first_name}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return f"{get_settings().CATALOG_PREFIX}/author/{self.id}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date_of_birth_formatted(self) -> str:
        return format_date_medium(self.date_of_birth)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def date_of_death_formatted(self) -> str:
        return format_date_medium(self.date_of_death)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lifespan(self) -> str:
        return f"{self.date_of_birth_formatted} - {self.date_of_death_formatted}"
