"""Shared test helpers for the Focus Timer API."""

import asyncio

from focus_timer_api.app.core.db import get_connection


def run(coro):
    """Run a service coroutine to completion."""
    return asyncio.run(coro)


def count_rows(table: str, where: str = "", params: tuple = ()) -> int:
    """Count rows in ``table`` directly, bypassing the services."""
    conn = get_connection()
    try:
        query = f"SELECT COUNT(*) AS n FROM {table}"
        if where:
            query += f" WHERE {where}"
        return conn.execute(query, params).fetchone()["n"]
    finally:
        conn.close()
