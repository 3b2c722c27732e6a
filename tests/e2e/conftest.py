"""
Playwright fixtures for the TaskFlow E2E tests.

By default both servers run in-process on background threads: the fake
TaskFlow API (``tests.fake_api``) and the frontend pointed at it.  Set
``TEST_BASE_URL`` to drive an already running frontend instead.
"""

from __future__ import annotations

import os
import threading
import time
import uuid
from collections.abc import Callable, Generator

import pytest
import requests
from playwright.sync_api import Browser, BrowserContext, Page

from taskflow_app import create_app
from tests.e2e.pages.dashboard_page import DashboardPage
from tests.e2e.pages.login_page import LoginPage
from tests.e2e.pages.register_page import RegisterPage
from tests.e2e.pages.task_form_page import TaskFormPage
from tests.e2e.pages.task_list_page import TaskListPage
from tests.fake_api import create_fake_api

HOST = "127.0.0.1"


def _wait_for_healthy(url: str, timeout: int = 30, interval: float = 0.5) -> None:
    """Poll a ``/health`` endpoint until ready or timeout."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            response = requests.get(f"{url}/health", timeout=2)
            if response.status_code == 200:
                return
        except requests.RequestException:
            pass
        time.sleep(interval)
    raise RuntimeError(f"Server at {url} not healthy after {timeout}s")


def _serve_in_background(flask_app, port: int) -> str:
    server_thread = threading.Thread(
        target=lambda: flask_app.run(host=HOST, port=port, use_reloader=False, threaded=True)
    )
    server_thread.daemon = True
    server_thread.start()
    base_url = f"http://{HOST}:{port}"
    _wait_for_healthy(base_url)
    return base_url


@pytest.fixture(scope="session")
def test_run_id() -> str:
    """Unique id for current E2E run to avoid data collisions."""
    return uuid.uuid4().hex[:8]


@pytest.fixture(scope="session")
def live_server() -> Generator[str, None, None]:
    """
    Return the base URL of a running frontend.

    Servers started here are daemon threads and stop with the test
    session.
    """
    provided_base_url = os.getenv("TEST_BASE_URL")
    if provided_base_url:
        _wait_for_healthy(provided_base_url)
        yield provided_base_url
        return

    api_url = _serve_in_background(create_fake_api(), int(os.getenv("E2E_API_PORT", "5101")))

    frontend = create_app("testing")
    frontend.config["API_BASE_URL"] = f"{api_url}/api/v1"
    frontend.config["API_TIMEOUT"] = 5
    yield _serve_in_background(frontend, int(os.getenv("E2E_WEB_PORT", "5100")))


@pytest.fixture(scope="session")
def browser_context_args():
    return {
        "viewport": {"width": 1280, "height": 720},
        "ignore_https_errors": True,
    }


@pytest.fixture(scope="function")
def context(browser: Browser, browser_context_args: dict) -> Generator[BrowserContext, None, None]:
    context = browser.new_context(**browser_context_args)
    yield context
    context.close()


@pytest.fixture(scope="function")
def page(context: BrowserContext) -> Generator[Page, None, None]:
    page = context.new_page()
    yield page
    page.close()


@pytest.fixture
def credential_factory(test_run_id: str) -> Callable[[str], dict[str, str]]:
    """Factory for unique E2E user credentials."""

    def _make(prefix: str = "user") -> dict[str, str]:
        suffix = uuid.uuid4().hex[:6]
        username = f"e2e_{test_run_id}_{prefix}_{suffix}"
        return {
            "username": username,
            "email": f"{username}@test.com",
            "password": "E2EPass123!",
        }

    return _make


@pytest.fixture
def login_page(page: Page, live_server: str) -> LoginPage:
    return LoginPage(page, live_server)


@pytest.fixture
def register_page(page: Page, live_server: str) -> RegisterPage:
    return RegisterPage(page, live_server)


@pytest.fixture
def dashboard_page(page: Page, live_server: str) -> DashboardPage:
    return DashboardPage(page, live_server)


@pytest.fixture
def task_list_page(page: Page, live_server: str) -> TaskListPage:
    return TaskListPage(page, live_server)


@pytest.fixture
def task_form_page(page: Page, live_server: str) -> TaskFormPage:
    return TaskFormPage(page, live_server)


@pytest.fixture
def authenticated_user(
    credential_factory: Callable[[str], dict[str, str]],
    register_page: RegisterPage,
    login_page: LoginPage,
) -> dict[str, str]:
    """Register and login a unique user in current browser context."""
    credentials = credential_factory("auth")
    register_page.navigate()
    register_page.register(
        username=credentials["username"],
        email=credentials["email"],
        password=credentials["password"],
    )
    login_page.assert_url_contains("/login")

    login_page.login(email=credentials["email"], password=credentials["password"])
    login_page.assert_url_contains("/dashboard")
    return credentials


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Capture screenshot on UI test failure."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        page = item.funcargs.get("page")
        if page:
            screenshot_dir = "test-results/screenshots"
            os.makedirs(screenshot_dir, exist_ok=True)
            test_name = item.name.replace("/", "_").replace("::", "_")
            screenshot_path = f"{screenshot_dir}/{test_name}.png"
            try:
                page.screenshot(path=screenshot_path)
                print(f"\nScreenshot saved: {screenshot_path}")
            except Exception as exc:  # pragma: no cover - best effort logging
                print(f"\nFailed to capture screenshot: {exc}")
