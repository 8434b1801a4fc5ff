"""
Tests for the HTTP adapter.

Tests cover:
- Authentication via bearer token
- Preset, session and interval routes with camelCase bodies
- Error body shape for each error kind
"""

from fastapi.testclient import TestClient

from focus_timer_api.app.core.config import settings
from focus_timer_api.app.core.db import MIGRATIONS
from focus_timer_api.app.main import app

from helpers import count_rows


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_startup_applies_migrations(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "fresh.db"))
    assert not (tmp_path / "fresh.db").exists()
    with TestClient(app) as started:
        assert started.get("/health").status_code == 200
        assert count_rows("migrations") == len(MIGRATIONS)
        assert count_rows("focus_sessions") == 0


class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/api/v1/presets/")
        assert response.status_code == 401
        assert response.json() == {
            "error": {"kind": "unauthorized", "message": "You must be signed in to perform this action."}
        }
        assert response.headers["www-authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        response = client.get("/api/v1/presets/", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401


class TestPresetRoutes:

    def test_create_and_list(self, client, alice_headers):
        response = client.post(
            "/api/v1/presets/",
            json={"name": "Classic", "isDefault": True, "longBreakMinutes": 15},
            headers=alice_headers,
        )
        assert response.status_code == 201
        preset = response.json()["preset"]
        assert preset["name"] == "Classic"
        assert preset["ownerId"] == "alice"
        assert preset["focusMinutes"] == 25
        assert preset["longBreakMinutes"] == 15
        assert preset["isDefault"] is True
        assert "createdAt" in preset and "updatedAt" in preset

        listed = client.get("/api/v1/presets/", headers=alice_headers).json()["presets"]
        assert [p["id"] for p in listed] == [preset["id"]]

    def test_default_scenario(self, client, alice_headers):
        client.post("/api/v1/presets/", json={"name": "Classic", "isDefault": True}, headers=alice_headers)
        client.post("/api/v1/presets/", json={"name": "Deep Work", "isDefault": True}, headers=alice_headers)
        presets = client.get("/api/v1/presets/", headers=alice_headers).json()["presets"]
        defaults = [p["name"] for p in presets if p["isDefault"]]
        assert defaults == ["Deep Work"]

    def test_patch_partial(self, client, alice_headers):
        preset = client.post("/api/v1/presets/", json={"name": "Classic"}, headers=alice_headers).json()["preset"]
        response = client.patch(
            f"/api/v1/presets/{preset['id']}",
            json={"shortBreakMinutes": 7},
            headers=alice_headers,
        )
        assert response.status_code == 200
        updated = response.json()["preset"]
        assert updated["shortBreakMinutes"] == 7
        assert updated["name"] == "Classic"

    def test_patch_empty_body_is_noop(self, client, alice_headers):
        preset = client.post("/api/v1/presets/", json={"name": "Classic"}, headers=alice_headers).json()["preset"]
        response = client.patch(f"/api/v1/presets/{preset['id']}", json={}, headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["preset"] == preset

    def test_patch_foreign_preset(self, client, alice_headers, bob_headers):
        preset = client.post("/api/v1/presets/", json={"name": "Classic"}, headers=alice_headers).json()["preset"]
        response = client.patch(f"/api/v1/presets/{preset['id']}", json={"name": "Mine"}, headers=bob_headers)
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["kind"] == "not_found"
        assert error["message"] == "Preset not found."

    def test_validation_error_shape(self, client, alice_headers):
        response = client.post("/api/v1/presets/", json={"name": "", "focusMinutes": 0}, headers=alice_headers)
        assert response.status_code == 422
        error = response.json()["error"]
        assert error["kind"] == "validation_error"
        fields = {e["field"] for e in error["details"]["errors"]}
        assert "body.name" in fields
        assert "body.focusMinutes" in fields


class TestSessionRoutes:

    def test_start_and_complete(self, client, alice_headers):
        response = client.post("/api/v1/sessions/", json={"plannedFocusMinutes": 25}, headers=alice_headers)
        assert response.status_code == 201
        session = response.json()["session"]
        assert session["status"] == "in_progress"
        assert session["actualFocusMinutes"] == 0
        assert session["endedAt"] is None

        response = client.post(
            f"/api/v1/sessions/{session['id']}/complete",
            json={"actualFocusMinutes": 23},
            headers=alice_headers,
        )
        assert response.status_code == 200
        done = response.json()["session"]
        assert done["status"] == "completed"
        assert done["actualFocusMinutes"] == 23
        assert done["endedAt"] is not None

    def test_complete_without_body(self, client, alice_headers):
        session = client.post("/api/v1/sessions/", json={"meta": {"tag": "x"}}, headers=alice_headers).json()["session"]
        response = client.post(f"/api/v1/sessions/{session['id']}/complete", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["session"]["meta"] == {"tag": "x"}

    def test_complete_twice_conflicts(self, client, alice_headers):
        session = client.post("/api/v1/sessions/", json={}, headers=alice_headers).json()["session"]
        client.post(f"/api/v1/sessions/{session['id']}/complete", json={}, headers=alice_headers)
        response = client.post(
            f"/api/v1/sessions/{session['id']}/complete",
            json={"status": "cancelled"},
            headers=alice_headers,
        )
        assert response.status_code == 409
        assert response.json()["error"]["kind"] == "conflict"

    def test_oversized_ids_are_validation_errors(self, client, alice_headers):
        response = client.post(f"/api/v1/sessions/{2**70}/complete", json={}, headers=alice_headers)
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "validation_error"

        response = client.patch(f"/api/v1/presets/{2**64}", json={"name": "x"}, headers=alice_headers)
        assert response.status_code == 422

        response = client.post("/api/v1/sessions/", json={"presetId": 2**70}, headers=alice_headers)
        assert response.status_code == 422
        assert response.json()["error"]["details"]["errors"][0]["field"] == "body.presetId"

        response = client.get(f"/api/v1/sessions/{-(2**70)}/intervals", headers=alice_headers)
        assert response.status_code == 422

    def test_start_with_foreign_preset(self, client, alice_headers, bob_headers):
        preset = client.post("/api/v1/presets/", json={"name": "Classic"}, headers=alice_headers).json()["preset"]
        response = client.post("/api/v1/sessions/", json={"presetId": preset["id"]}, headers=bob_headers)
        assert response.status_code == 404


class TestIntervalRoutes:

    def test_add_and_list(self, client, alice_headers):
        session = client.post("/api/v1/sessions/", json={}, headers=alice_headers).json()["session"]
        response = client.post(
            f"/api/v1/sessions/{session['id']}/intervals",
            json={"type": "break", "durationSeconds": 300, "completed": True},
            headers=alice_headers,
        )
        assert response.status_code == 201
        interval = response.json()["interval"]
        assert interval["type"] == "break"
        assert interval["durationSeconds"] == 300
        assert interval["sessionId"] == session["id"]

        listed = client.get(f"/api/v1/sessions/{session['id']}/intervals", headers=alice_headers).json()
        assert [i["id"] for i in listed["intervals"]] == [interval["id"]]

    def test_foreign_session(self, client, alice_headers, bob_headers):
        session = client.post("/api/v1/sessions/", json={}, headers=alice_headers).json()["session"]
        response = client.post(
            f"/api/v1/sessions/{session['id']}/intervals",
            json={"type": "break", "durationSeconds": 300},
            headers=bob_headers,
        )
        assert response.status_code == 404
        assert client.get(f"/api/v1/sessions/{session['id']}/intervals", headers=bob_headers).status_code == 404
        listed = client.get(f"/api/v1/sessions/{session['id']}/intervals", headers=alice_headers).json()
        assert listed["intervals"] == []

    def test_bad_interval_type(self, client, alice_headers):
        session = client.post("/api/v1/sessions/", json={}, headers=alice_headers).json()["session"]
        response = client.post(
            f"/api/v1/sessions/{session['id']}/intervals",
            json={"type": "nap"},
            headers=alice_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"]["kind"] == "validation_error"
