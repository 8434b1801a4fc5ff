"""
Pydantic schemas for timer presets.

A preset is a named timer configuration (focus and break lengths,
cycle counts) owned by one user.  At most one of a user's presets is
flagged as the default the client should pre-select.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .common import SQLITE_INT_MAX, CamelModel, reject_null


class PresetCreate(CamelModel):
    """Input for creating a preset."""

    name: str = Field(..., min_length=1, examples=["25 / 5 Classic"])
    focus_minutes: int = Field(25, gt=0, le=SQLITE_INT_MAX)
    short_break_minutes: int = Field(5, gt=0, le=SQLITE_INT_MAX)
    long_break_minutes: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    cycles_before_long_break: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    cycles_per_block: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    is_default: bool = False


class PresetUpdate(CamelModel):
    """Input for a partial preset update.

    Only fields present in the payload are applied.  ``null`` clears the
    optional timing fields and is rejected for the others.
    """

    name: Optional[str] = Field(None, min_length=1)
    focus_minutes: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    short_break_minutes: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    long_break_minutes: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    cycles_before_long_break: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    cycles_per_block: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    is_default: Optional[bool] = None

    @field_validator("name", "focus_minutes", "short_break_minutes", "is_default", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    def changes(self) -> dict:
        """Fields explicitly supplied by the caller, keyed by column name."""
        return self.model_dump(include=self.model_fields_set)


class PresetRead(CamelModel):
    """A stored preset."""

    id: int
    owner_id: str
    name: str
    focus_minutes: int
    short_break_minutes: int
    long_break_minutes: Optional[int] = None
    cycles_before_long_break: Optional[int] = None
    cycles_per_block: Optional[int] = None
    is_default: bool
    created_at: datetime
    updated_at: datetime


class PresetResponse(CamelModel):
    preset: PresetRead


class PresetListResponse(CamelModel):
    presets: List[PresetRead]
