"""Test helper functions and doubles shared across the TaskFlow test suites."""

from __future__ import annotations

from typing import Any

DEFAULT_TOKEN = "test-token"

ADMIN_IDENTITY: dict[str, Any] = {
    "id": 1,
    "username": "admin",
    "email": "admin@example.com",
    "role": "ADMIN",
}
USER_IDENTITY: dict[str, Any] = {
    "id": 2,
    "username": "user1",
    "email": "user@example.com",
    "role": "USER",
}


class FakeResponse:
    """
    Minimal stand-in for :class:`requests.Response`.

    Provides just enough interface (``status_code``, ``json()`` and
    ``text``) for the API client, which only inspects these attributes.

    Attributes:
        status_code: HTTP status code returned by the fake response.
    """

    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    @property
    def text(self) -> str:
        return "" if self._payload is None else str(self._payload)

    def json(self):
        """Return the configured payload; a missing body is not JSON."""
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


def user_ref(identity: dict[str, Any]) -> dict[str, Any]:
    """Build the ``createdBy``/``assignedTo`` object the API embeds in tasks."""
    return {key: identity[key] for key in ("id", "username", "email", "role")}


def task_payload(
    task_id: int = 1,
    *,
    title: str = "Write docs",
    description: str = "Document the API",
    status: str = "TODO",
    priority: str = "MEDIUM",
    created_by: dict[str, Any] | None = None,
    assigned_to: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a task JSON object shaped like the API's ``TaskResponse``."""
    return {
        "id": task_id,
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "createdBy": user_ref(created_by or USER_IDENTITY),
        "assignedTo": user_ref(assigned_to) if assigned_to else None,
        "createdAt": "2026-01-01T10:00:00",
        "updatedAt": "2026-01-01T10:00:00",
    }


def login_payload(identity: dict[str, Any], token: str = DEFAULT_TOKEN) -> dict[str, Any]:
    """Build a ``POST /auth/login`` success body."""
    return {"token": token, "refreshToken": f"{token}-refresh", **identity}


def sign_in(client, identity: dict[str, Any], token: str = DEFAULT_TOKEN) -> None:
    """Write a session straight into the test client's cookie."""
    with client.session_transaction() as sess:
        sess["token"] = token
        sess["user"] = dict(identity)
