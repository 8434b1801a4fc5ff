"""
Pydantic schemas for focus sessions.

A session is one run of the focus timer.  It starts ``in_progress``
and moves once to ``completed`` or ``cancelled``.  ``meta`` is an
opaque JSON value (tags, linked task ids, ...) stored as-is.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from .common import SQLITE_INT_MAX, SQLITE_INT_MIN, CamelModel, check_json, reject_null


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset({SessionStatus.COMPLETED, SessionStatus.CANCELLED})


class SessionStart(CamelModel):
    """Input for starting a session."""

    preset_id: Optional[int] = Field(None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)
    label: Optional[str] = None
    planned_focus_minutes: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    planned_cycles: Optional[int] = Field(None, gt=0, le=SQLITE_INT_MAX)
    meta: Optional[Any] = None

    @field_validator("meta")
    @classmethod
    def json_meta(cls, value: Any) -> Any:
        return check_json(value)


class SessionComplete(CamelModel):
    """Input for completing (or cancelling) a session.

    Counters and ``meta`` left out keep their stored values.  ``status``
    defaults to ``completed``.
    """

    actual_focus_minutes: Optional[int] = Field(None, ge=0, le=SQLITE_INT_MAX)
    actual_break_minutes: Optional[int] = Field(None, ge=0, le=SQLITE_INT_MAX)
    completed_cycles: Optional[int] = Field(None, ge=0, le=SQLITE_INT_MAX)
    status: SessionStatus = SessionStatus.COMPLETED
    meta: Optional[Any] = None

    @field_validator("status", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("status")
    @classmethod
    def terminal_only(cls, value: SessionStatus) -> SessionStatus:
        if value not in TERMINAL_STATUSES:
            raise ValueError("status must be 'completed' or 'cancelled'")
        return value

    @field_validator("meta")
    @classmethod
    def json_meta(cls, value: Any) -> Any:
        return check_json(value)


class SessionRead(CamelModel):
    """A stored session."""

    id: int
    user_id: str
    preset_id: Optional[int] = None
    label: Optional[str] = None
    planned_focus_minutes: Optional[int] = None
    actual_focus_minutes: int
    actual_break_minutes: int
    planned_cycles: Optional[int] = None
    completed_cycles: int
    status: SessionStatus
    started_at: datetime
    ended_at: Optional[datetime] = None
    meta: Optional[Any] = None


class SessionResponse(CamelModel):
    session: SessionRead
