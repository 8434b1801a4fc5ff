"""
Service layer for timer presets.

Presets belong to exactly one user and every query filters on
``owner_id``.  At most one preset per owner carries ``is_default``;
whenever a preset becomes the default, the owner's other defaults are
cleared in the same transaction as the write itself, so a failure or a
concurrent writer never leaves the owner with two defaults.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from focus_timer_api.app.core.db import get_cursor, utcnow_iso
from focus_timer_api.app.core.exceptions import NotFoundError
from focus_timer_api.app.core.security import Identity, require_user
from focus_timer_api.app.schemas.preset import PresetCreate, PresetRead, PresetUpdate

logger = logging.getLogger(__name__)

# Columns a partial update may touch.
UPDATABLE_COLUMNS = (
    "name",
    "focus_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "cycles_before_long_break",
    "cycles_per_block",
    "is_default",
)


class PresetService:
    """Create, update and list a user's timer presets."""

    @classmethod
    async def create_preset(cls, identity: Optional[Identity], data: PresetCreate) -> PresetRead:
        """Insert a new preset owned by the caller.

        If ``data.is_default`` is set, the caller's current default is
        cleared first.  ``created_at`` and ``updated_at`` are both set to
        the insertion time.
        """
        user = require_user(identity)
        now = utcnow_iso()
        with get_cursor() as cursor:
            if data.is_default:
                cls._clear_default(cursor, user.id, now)
            cursor.execute(
                """
                INSERT INTO timer_presets (
                    owner_id, name, focus_minutes, short_break_minutes, long_break_minutes,
                    cycles_before_long_break, cycles_per_block, is_default, created_at, updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user.id,
                    data.name,
                    data.focus_minutes,
                    data.short_break_minutes,
                    data.long_break_minutes,
                    data.cycles_before_long_break,
                    data.cycles_per_block,
                    int(data.is_default),
                    now,
                    now,
                ),
            )
            preset_id = cursor.lastrowid
            row = cls._fetch(cursor, preset_id, user.id)
        logger.info("User %s created preset %s", user.id, preset_id)
        return cls._row_to_preset_read(row)

    @classmethod
    async def update_preset(
        cls, identity: Optional[Identity], preset_id: int, data: PresetUpdate
    ) -> PresetRead:
        """Apply the fields present in ``data`` to one of the caller's presets.

        Raises ``NotFoundError`` if the preset does not exist or belongs
        to another user.  With nothing to change, the stored row is
        returned as-is and ``updated_at`` is left alone.
        """
        user = require_user(identity)
        changes = data.changes()
        with get_cursor() as cursor:
            row = cls._fetch(cursor, preset_id, user.id)
            if row is None:
                logger.warning("User %s: preset %s not found", user.id, preset_id)
                raise NotFoundError("Preset", preset_id)
            if not changes:
                return cls._row_to_preset_read(row)

            now = utcnow_iso()
            if changes.get("is_default"):
                cls._clear_default(cursor, user.id, now, exclude_id=preset_id)
            if "is_default" in changes:
                changes["is_default"] = int(changes["is_default"])

            columns = [column for column in UPDATABLE_COLUMNS if column in changes]
            assignments = ", ".join(f"{column} = ?" for column in columns)
            params = [changes[column] for column in columns]
            cursor.execute(
                f"UPDATE timer_presets SET {assignments}, updated_at = ? WHERE id = ? AND owner_id = ?",
                (*params, now, preset_id, user.id),
            )
            row = cls._fetch(cursor, preset_id, user.id)
        logger.info("User %s updated preset %s: %s", user.id, preset_id, ", ".join(columns))
        return cls._row_to_preset_read(row)

    @classmethod
    async def list_presets(cls, identity: Optional[Identity]) -> List[PresetRead]:
        """Return every preset owned by the caller, oldest first."""
        user = require_user(identity)
        with get_cursor() as cursor:
            rows = cursor.execute(
                "SELECT * FROM timer_presets WHERE owner_id = ? ORDER BY id ASC",
                (user.id,),
            ).fetchall()
        return [cls._row_to_preset_read(row) for row in rows]

    @classmethod
    def ensure_owned(cls, cursor: sqlite3.Cursor, preset_id: int, owner_id: str) -> None:
        """Raise ``NotFoundError`` unless ``owner_id`` owns the preset."""
        if cls._fetch(cursor, preset_id, owner_id) is None:
            logger.warning("User %s: preset %s not found", owner_id, preset_id)
            raise NotFoundError("Preset", preset_id)

    @staticmethod
    def _clear_default(
        cursor: sqlite3.Cursor, owner_id: str, now: str, exclude_id: Optional[int] = None
    ) -> None:
        query = "UPDATE timer_presets SET is_default = 0, updated_at = ? WHERE owner_id = ? AND is_default = 1"
        params: list = [now, owner_id]
        if exclude_id is not None:
            query += " AND id != ?"
            params.append(exclude_id)
        cursor.execute(query, tuple(params))
        if cursor.rowcount:
            logger.debug("Cleared default flag on %s preset(s) of user %s", cursor.rowcount, owner_id)

    @staticmethod
    def _fetch(cursor: sqlite3.Cursor, preset_id: int, owner_id: str) -> Optional[sqlite3.Row]:
        return cursor.execute(
            "SELECT * FROM timer_presets WHERE id = ? AND owner_id = ?",
            (preset_id, owner_id),
        ).fetchone()

    @staticmethod
    def _row_to_preset_read(row: sqlite3.Row) -> PresetRead:
        """Convert a database row to a PresetRead schema instance."""
        return PresetRead(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            focus_minutes=row["focus_minutes"],
            short_break_minutes=row["short_break_minutes"],
            long_break_minutes=row["long_break_minutes"],
            cycles_before_long_break=row["cycles_before_long_break"],
            cycles_per_block=row["cycles_per_block"],
            is_default=bool(row["is_default"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
