"""
Service layer for focus sessions.

A session starts ``in_progress`` and is closed exactly once by
``complete_session``, which stamps ``ended_at`` and moves it to
``completed`` or ``cancelled``.  Closing a session that is already
closed is refused with ``ConflictError`` so the status never leaves a
terminal state and ``ended_at`` keeps the original end time.

``meta`` is stored as JSON text and handed back untouched.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Optional

from focus_timer_api.app.core.db import get_cursor, utcnow_iso
from focus_timer_api.app.core.exceptions import ConflictError, NotFoundError
from focus_timer_api.app.core.security import Identity, require_user
from focus_timer_api.app.schemas.session import (
    SessionComplete,
    SessionRead,
    SessionStart,
    SessionStatus,
)
from focus_timer_api.app.services.preset_service import PresetService

logger = logging.getLogger(__name__)


class SessionService:
    """Start and complete a user's focus sessions."""

    @classmethod
    async def start_session(cls, identity: Optional[Identity], data: SessionStart) -> SessionRead:
        """Open a new ``in_progress`` session for the caller.

        If ``data.preset_id`` is given it must name one of the caller's
        presets, otherwise ``NotFoundError`` is raised and nothing is
        written.
        """
        user = require_user(identity)
        with get_cursor() as cursor:
            if data.preset_id is not None:
                PresetService.ensure_owned(cursor, data.preset_id, user.id)
            cursor.execute(
                """
                INSERT INTO focus_sessions (
                    user_id, preset_id, label, planned_focus_minutes, planned_cycles,
                    status, started_at, meta
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    data.preset_id,
                    data.label,
                    data.planned_focus_minutes,
                    data.planned_cycles,
                    SessionStatus.IN_PROGRESS.value,
                    utcnow_iso(),
                    cls._dump_meta(data.meta),
                ),
            )
            session_id = cursor.lastrowid
            row = cls.fetch_owned(cursor, session_id, user.id)
        logger.info("User %s started session %s", user.id, session_id)
        return cls._row_to_session_read(row)

    @classmethod
    async def complete_session(
        cls, identity: Optional[Identity], session_id: int, data: SessionComplete
    ) -> SessionRead:
        """Close one of the caller's sessions.

        Counters and ``meta`` omitted from ``data`` keep their stored
        values; ``ended_at`` is set to now.  Raises ``NotFoundError`` for
        unknown or foreign sessions and ``ConflictError`` if the session
        is no longer in progress.
        """
        user = require_user(identity)
        with get_cursor() as cursor:
            row = cls.fetch_owned(cursor, session_id, user.id)
            if row["status"] != SessionStatus.IN_PROGRESS.value:
                logger.warning(
                    "User %s tried to close session %s which is already %s",
                    user.id, session_id, row["status"],
                )
                raise ConflictError(f"Session is already {row['status']}.")

            actual_focus = data.actual_focus_minutes if data.actual_focus_minutes is not None else row["actual_focus_minutes"]
            actual_break = data.actual_break_minutes if data.actual_break_minutes is not None else row["actual_break_minutes"]
            completed_cycles = data.completed_cycles if data.completed_cycles is not None else row["completed_cycles"]
            meta = cls._dump_meta(data.meta) if data.meta is not None else row["meta"]
            cursor.execute(
                """
                UPDATE focus_sessions
                SET actual_focus_minutes = ?, actual_break_minutes = ?, completed_cycles = ?,
                    status = ?, ended_at = ?, meta = ?
                WHERE id = ? AND user_id = ? AND status = ?
                """,
                (
                    actual_focus,
                    actual_break,
                    completed_cycles,
                    data.status.value,
                    utcnow_iso(),
                    meta,
                    session_id,
                    user.id,
                    SessionStatus.IN_PROGRESS.value,
                ),
            )
            if cursor.rowcount == 0:
                # Closed by another request after the status check above.
                logger.warning("User %s: session %s was closed concurrently", user.id, session_id)
                raise ConflictError("Session is already closed.")
            row = cls.fetch_owned(cursor, session_id, user.id)
        logger.info("User %s closed session %s as %s", user.id, session_id, data.status.value)
        return cls._row_to_session_read(row)

    @staticmethod
    def fetch_owned(cursor: sqlite3.Cursor, session_id: int, user_id: str) -> sqlite3.Row:
        """Return the session row if ``user_id`` owns it, else raise ``NotFoundError``."""
        row = cursor.execute(
            "SELECT * FROM focus_sessions WHERE id = ? AND user_id = ?",
            (session_id, user_id),
        ).fetchone()
        if row is None:
            logger.warning("User %s: session %s not found", user_id, session_id)
            raise NotFoundError("Session", session_id)
        return row

    @staticmethod
    def _dump_meta(meta: Any) -> Optional[str]:
        return json.dumps(meta) if meta is not None else None

    @staticmethod
    def _row_to_session_read(row: sqlite3.Row) -> SessionRead:
        """Convert a database row to a SessionRead schema instance."""
        return SessionRead(
            id=row["id"],
            user_id=row["user_id"],
            preset_id=row["preset_id"],
            label=row["label"],
            planned_focus_minutes=row["planned_focus_minutes"],
            actual_focus_minutes=row["actual_focus_minutes"],
            actual_break_minutes=row["actual_break_minutes"],
            planned_cycles=row["planned_cycles"],
            completed_cycles=row["completed_cycles"],
            status=row["status"],
            started_at=row["started_at"],
            ended_at=row["ended_at"],
            meta=json.loads(row["meta"]) if row["meta"] is not None else None,
        )
