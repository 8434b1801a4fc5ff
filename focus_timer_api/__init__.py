"""
Top-level package for the Focus Timer API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``focus_timer_api.app.main:app``.
"""

__all__ = []
