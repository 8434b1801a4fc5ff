"""
Session and interval endpoints for API v1.

Intervals are nested under their session because they are owned
through it: every interval route first checks that the session in the
path belongs to the caller.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, status

from focus_timer_api.app.core.security import Identity, get_current_identity
from focus_timer_api.app.schemas.common import SQLITE_INT_MAX, SQLITE_INT_MIN
from focus_timer_api.app.schemas.interval import (
    IntervalCreate,
    IntervalListResponse,
    IntervalResponse,
)
from focus_timer_api.app.schemas.session import SessionComplete, SessionResponse, SessionStart
from focus_timer_api.app.services.interval_service import IntervalService
from focus_timer_api.app.services.session_service import SessionService

router = APIRouter()


@router.post("/", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(
    session_in: SessionStart,
    identity: Optional[Identity] = Depends(get_current_identity),
) -> SessionResponse:
    """Start a session, optionally based on one of the caller's presets."""
    session = await SessionService.start_session(identity, session_in)
    return SessionResponse(session=session)


@router.post("/{session_id}/complete", response_model=SessionResponse)
async def complete_session(
    session_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    session_in: Optional[SessionComplete] = None,
    identity: Optional[Identity] = Depends(get_current_identity),
) -> SessionResponse:
    """Close a session.  An empty body completes it with its current counters."""
    session = await SessionService.complete_session(identity, session_id, session_in or SessionComplete())
    return SessionResponse(session=session)


@router.post(
    "/{session_id}/intervals",
    response_model=IntervalResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_interval(
    session_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    interval_in: Optional[IntervalCreate] = None,
    identity: Optional[Identity] = Depends(get_current_identity),
) -> IntervalResponse:
    """Record a focus or break interval in the session."""
    interval = await IntervalService.add_interval(identity, session_id, interval_in or IntervalCreate())
    return IntervalResponse(interval=interval)


@router.get("/{session_id}/intervals", response_model=IntervalListResponse)
async def list_intervals(
    session_id: int = Path(..., ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    identity: Optional[Identity] = Depends(get_current_identity),
) -> IntervalListResponse:
    """Return the intervals recorded in the session."""
    intervals = await IntervalService.list_intervals(identity, session_id)
    return IntervalListResponse(intervals=intervals)
