"""Pydantic schemas for focus/break intervals recorded inside a session."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from .common import SQLITE_INT_MAX, CamelModel, as_utc, reject_null


class IntervalType(str, Enum):
    FOCUS = "focus"
    BREAK = "break"
    LONG_BREAK = "long_break"


class IntervalCreate(CamelModel):
    """Input for recording an interval.  ``started_at`` defaults to now."""

    type: IntervalType = IntervalType.FOCUS
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    duration_seconds: int = Field(0, ge=0, le=SQLITE_INT_MAX)
    completed: bool = False

    @field_validator("type", "duration_seconds", "completed", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("started_at", "ended_at")
    @classmethod
    def normalise_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class IntervalRead(CamelModel):
    """A stored interval."""

    id: int
    session_id: int
    type: IntervalType
    started_at: datetime
    ended_at: Optional[datetime] = None
    duration_seconds: int
    completed: bool


class IntervalResponse(CamelModel):
    interval: IntervalRead


class IntervalListResponse(CamelModel):
    intervals: List[IntervalRead]
