"""
Service layer for session intervals.

Intervals have no owner column of their own: they belong to the user
who owns the parent session, so every call resolves that session first
and refuses with ``NotFoundError`` when the caller does not own it.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from focus_timer_api.app.core.db import get_cursor, utcnow_iso
from focus_timer_api.app.core.security import Identity, require_user
from focus_timer_api.app.schemas.interval import IntervalCreate, IntervalRead
from focus_timer_api.app.services.session_service import SessionService

logger = logging.getLogger(__name__)


class IntervalService:
    """Record and list the intervals of a user's session."""

    @classmethod
    async def add_interval(
        cls, identity: Optional[Identity], session_id: int, data: IntervalCreate
    ) -> IntervalRead:
        """Append an interval to one of the caller's sessions."""
        user = require_user(identity)
        started_at = data.started_at.isoformat() if data.started_at else utcnow_iso()
        ended_at = data.ended_at.isoformat() if data.ended_at else None
        with get_cursor() as cursor:
            SessionService.fetch_owned(cursor, session_id, user.id)
            cursor.execute(
                """
                INSERT INTO focus_intervals (session_id, type, started_at, ended_at, duration_seconds, completed)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    session_id,
                    data.type.value,
                    started_at,
                    ended_at,
                    data.duration_seconds,
                    int(data.completed),
                ),
            )
            interval_id = cursor.lastrowid
            row = cursor.execute(
                "SELECT * FROM focus_intervals WHERE id = ?",
                (interval_id,),
            ).fetchone()
        logger.info("User %s added %s interval %s to session %s", user.id, data.type.value, interval_id, session_id)
        return cls._row_to_interval_read(row)

    @classmethod
    async def list_intervals(cls, identity: Optional[Identity], session_id: int) -> List[IntervalRead]:
        """Return the intervals of one of the caller's sessions in start order."""
        user = require_user(identity)
        with get_cursor() as cursor:
            SessionService.fetch_owned(cursor, session_id, user.id)
            rows = cursor.execute(
                "SELECT * FROM focus_intervals WHERE session_id = ? ORDER BY started_at ASC, id ASC",
                (session_id,),
            ).fetchall()
        return [cls._row_to_interval_read(row) for row in rows]

    @staticmethod
    def _row_to_interval_read(row: sqlite3.Row) -> IntervalRead:
        return IntervalRead(
            id=row["id"],
            session_id=row["session_id"],
            type=row["type"],
            started_at=row["started_at"],
            ended_at=row["ended_at"],
            duration_seconds=row["duration_seconds"],
            completed=bool(row["completed"]),
        )
