"""Focus Timer API client.

A thin ``requests`` wrapper around the HTTP routes of the Focus Timer
API.  One method per operation; keyword arguments are snake_case and
sent as camelCase JSON.  Only the keyword arguments actually passed are
sent, so ``update_preset(1, long_break_minutes=None)`` clears that
field while ``update_preset(1)`` changes nothing.

Every method returns the decoded result object (a dict or a list of
dicts).  Non-2xx responses raise :class:`FocusTimerClientError` with the
error ``kind`` and ``message`` reported by the server.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from focus_timer_api.app.schemas.common import to_camel

logger = logging.getLogger(__name__)


class FocusTimerClientError(Exception):
    """Raised when the API answers with an error or cannot be reached."""

    def __init__(self, kind: str, message: str, status_code: Optional[int] = None) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(f"{kind}: {message}")


class FocusTimerClient:
    """Client for the ``/api/v1`` routes of the Focus Timer API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            token: Bearer token identifying the user.  See
                ``create_token.py``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, json_body: Any | None = None) -> Any:
        url = f"{self.base_url}/api/v1{path}"
        headers: Dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        logger.debug("Sending %s request to %s", method, url)
        try:
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise FocusTimerClientError("connection_error", str(exc)) from exc

        if not response.ok:
            kind, message = "http_error", response.text or response.reason
            try:
                error = response.json().get("error", {})
                kind = error.get("kind", kind)
                message = error.get("message", message)
            except (ValueError, AttributeError):
                pass
            logger.error("API request failed (%s): %s", response.status_code, message)
            raise FocusTimerClientError(kind, message, response.status_code)
        return response.json()

    @staticmethod
    def _body(fields: Dict[str, Any]) -> Dict[str, Any]:
        return {to_camel(key): value for key, value in fields.items()}

    # ------------------------------------------------------------------
    # Presets
    # ------------------------------------------------------------------
    def create_preset(self, name: str, **fields: Any) -> Dict[str, Any]:
        return self._request("POST", "/presets/", self._body({"name": name, **fields}))["preset"]

    def update_preset(self, preset_id: int, **fields: Any) -> Dict[str, Any]:
        return self._request("PATCH", f"/presets/{preset_id}", self._body(fields))["preset"]

    def list_presets(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/presets/")["presets"]

    # ------------------------------------------------------------------
    # Sessions and intervals
    # ------------------------------------------------------------------
    def start_session(self, **fields: Any) -> Dict[str, Any]:
        return self._request("POST", "/sessions/", self._body(fields))["session"]

    def complete_session(self, session_id: int, **fields: Any) -> Dict[str, Any]:
        return self._request("POST", f"/sessions/{session_id}/complete", self._body(fields))["session"]

    def add_interval(self, session_id: int, **fields: Any) -> Dict[str, Any]:
        return self._request("POST", f"/sessions/{session_id}/intervals", self._body(fields))["interval"]

    def list_intervals(self, session_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/sessions/{session_id}/intervals")["intervals"]
