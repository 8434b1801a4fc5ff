"""
Application package.

Contains the FastAPI entrypoint and its submodules: ``core`` (settings,
database, identity, errors, logging), ``schemas``, ``services`` (one
class per domain holding the operations) and ``api`` (versioned HTTP
routes).
"""

from .main import app  # noqa: F401
