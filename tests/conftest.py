"""
Shared pytest fixtures for the TaskFlow frontend test suite.

Provides the Flask app and test client, a request context for exercising
controllers directly, and a fake TaskFlow API wired in place of
``requests.request`` so that tests never touch the network.

Key SDET Concepts Demonstrated:
- Fixture scoping (session vs. function) for performance and isolation
- Environment variable overrides for deterministic test configuration
- Monkeypatching the HTTP layer with a behaving fake
- Test data generation with Faker
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from taskflow_app import create_app
from tests.fake_api import ApiRecorder, create_fake_api

fake = Faker()

REQUESTS_TARGET = "taskflow_app.api_client.requests.request"


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Creates the app once with the 'testing' config and reuses it across
    all tests to avoid repeated startup overhead.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Provide a Flask test client scoped to a single test function.

    Opens a new test-client context for every test so that cookies and
    session state never leak between tests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def request_ctx(app):
    """Push a request context so controllers can use the session and config."""
    with app.test_request_context():
        yield


@pytest.fixture(scope="function")
def fake_api(monkeypatch):
    """
    Route every outgoing API call to a freshly seeded in-memory fake API.

    Returns:
        The :class:`ApiRecorder` that received the patched calls; use
        ``.calls``/``.count()`` for interaction assertions and ``.state``
        to inspect or arrange backend data.
    """
    recorder = ApiRecorder(create_fake_api())
    monkeypatch.setattr(REQUESTS_TARGET, recorder)
    return recorder


@pytest.fixture
def login(client, fake_api):
    """
    Factory fixture that signs the test client in through ``POST /login``.

    The recorded calls are cleared afterwards so assertions only see the
    traffic produced by the test itself.

    Example:
        def test_something(login):
            login("admin@example.com", "Admin@123")
    """

    def _login(email: str, password: str):
        response = client.post(
            "/login",
            data={"email": email, "password": password},
            follow_redirects=False,
        )
        assert response.status_code == 302, response.data
        fake_api.calls.clear()
        return response

    return _login


@pytest.fixture
def task_form():
    """Factory for valid task form data with Faker-generated text."""

    def _task_form(**overrides) -> dict[str, str]:
        data = {
            "title": fake.sentence(nb_words=4).rstrip("."),
            "description": fake.paragraph(),
            "status": "TODO",
            "priority": "MEDIUM",
        }
        data.update(overrides)
        return data

    return _task_form
