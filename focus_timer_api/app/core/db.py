"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a transactional cursor (``get_cursor``) and
applying migrations on application start (``init_db``).  Applied
migration versions are stored in the ``migrations`` table and new
migrations are executed in order.

Timestamps are written as ISO-8601 UTC strings (see ``utcnow_iso``)
and booleans as 0/1 integers.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: presets, sessions and intervals
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS timer_presets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            owner_id TEXT NOT NULL,
            name TEXT NOT NULL,
            focus_minutes INTEGER NOT NULL DEFAULT 25,
            short_break_minutes INTEGER NOT NULL DEFAULT 5,
            long_break_minutes INTEGER,
            cycles_before_long_break INTEGER,
            cycles_per_block INTEGER,
            is_default INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP NOT NULL,
            updated_at TIMESTAMP NOT NULL
        );

        CREATE TABLE IF NOT EXISTS focus_sessions (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            preset_id INTEGER,
            label TEXT,
            planned_focus_minutes INTEGER,
            actual_focus_minutes INTEGER NOT NULL DEFAULT 0,
            actual_break_minutes INTEGER NOT NULL DEFAULT 0,
            planned_cycles INTEGER,
            completed_cycles INTEGER NOT NULL DEFAULT 0,
            status TEXT NOT NULL DEFAULT 'in_progress'
                CHECK (status IN ('in_progress', 'completed', 'cancelled')),
            started_at TIMESTAMP NOT NULL,
            ended_at TIMESTAMP,
            meta TEXT,
            FOREIGN KEY(preset_id) REFERENCES timer_presets(id)
        );

        CREATE TABLE IF NOT EXISTS focus_intervals (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            session_id INTEGER NOT NULL,
            type TEXT NOT NULL DEFAULT 'focus'
                CHECK (type IN ('focus', 'break', 'long_break')),
            started_at TIMESTAMP NOT NULL,
            ended_at TIMESTAMP,
            duration_seconds INTEGER NOT NULL DEFAULT 0,
            completed INTEGER NOT NULL DEFAULT 0,
            FOREIGN KEY(session_id) REFERENCES focus_sessions(id)
        );
        """,
    ),
    # Migration 2: ownership lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_timer_presets_owner ON timer_presets(owner_id);
        CREATE INDEX IF NOT EXISTS idx_focus_sessions_user ON focus_sessions(user_id);
        CREATE INDEX IF NOT EXISTS idx_focus_intervals_session ON focus_intervals(session_id);
        """,
    ),
]


def utcnow_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection.
    """
    conn = sqlite3.connect(get_database_path(), timeout=settings.db_timeout_seconds)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor inside a single transaction.

    Everything executed through the cursor is committed together when
    the block exits normally and rolled back if it raises.  The
    connection is always closed.
    """
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies any newer entries of
    ``MIGRATIONS`` in order.  To change the schema, append a migration
    with an incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
                logger.info("Applied migration %s", version)
