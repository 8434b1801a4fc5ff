"""Shared pytest fixtures for the Focus Timer API tests."""

import pytest
from fastapi.testclient import TestClient

from focus_timer_api.app.core.config import settings
from focus_timer_api.app.core.db import init_db
from focus_timer_api.app.core.security import Identity, create_access_token
from focus_timer_api.app.main import app


@pytest.fixture(autouse=True)
def test_db(tmp_path, monkeypatch):
    """Point every test at a fresh SQLite file with all migrations applied."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "focus_timer.db"))
    init_db()
    yield


@pytest.fixture
def alice():
    return Identity(id="alice")


@pytest.fixture
def bob():
    return Identity(id="bob")


@pytest.fixture
def client():
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def alice_headers():
    return {"Authorization": f"Bearer {create_access_token({'sub': 'alice'})}"}


@pytest.fixture
def bob_headers():
    return {"Authorization": f"Bearer {create_access_token({'sub': 'bob'})}"}
