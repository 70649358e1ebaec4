"""Schemas shared by several modules."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TimestampSchema(BaseModel):
    """Timestamps carried by every persisted entity."""

    created_at: Optional[datetime] = Field(default=None, description="When the record was created")
    updated_at: Optional[datetime] = Field(default=None, description="When the record was last updated")
