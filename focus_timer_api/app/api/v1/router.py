"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new domains are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import presets, sessions

router = APIRouter()

router.include_router(presets.router, prefix="/presets", tags=["presets"])
# Interval routes live in the sessions router under /sessions/{id}/intervals.
router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
