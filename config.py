"""
Configuration classes for the TaskFlow web frontend.

The frontend is a stateless BFF (backend-for-frontend). It serves
server-rendered HTML, keeps the signed-in identity in the session cookie,
and delegates every task and account operation to the TaskFlow REST API.
Configuration values are loaded from environment variables with sensible
defaults.
"""

from __future__ import annotations

import os
from datetime import timedelta

def _env_bool(name: str, default: str) -> bool:
    """Read a ``true``/``false`` environment flag."""
    return os.environ.get(name, default).strip().lower() == "true"


class Config:
    """Base configuration for all environments."""

    SECRET_KEY: str = os.environ.get(
        "SECRET_KEY", "taskflow-web-dev-secret-change-in-production"
    )

    API_BASE_URL: str = os.environ.get("API_BASE_URL", "http://localhost:8080/api/v1")
    API_TIMEOUT: int = int(os.environ.get("API_TIMEOUT", "5"))

    # Admin listing defaults; callers may override per request.
    TASK_PAGE: int = 0
    TASK_PAGE_SIZE: int = int(os.environ.get("TASK_PAGE_SIZE", "10"))
    TASK_SORT_BY: str = os.environ.get("TASK_SORT_BY", "createdAt")

    FLASH_DISMISS_SECONDS: int = int(os.environ.get("FLASH_DISMISS_SECONDS", "5"))
    DASHBOARD_RECENT_LIMIT: int = 5

    PERMANENT_SESSION_LIFETIME: timedelta = timedelta(
        days=int(os.environ.get("SESSION_LIFETIME_DAYS", "7"))
    )
    SESSION_COOKIE_HTTPONLY: bool = True
    SESSION_COOKIE_SAMESITE: str = os.environ.get("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE: bool = _env_bool("SESSION_COOKIE_SECURE", "false")


class DevelopmentConfig(Config):
    """Configuration for local development."""

    DEBUG: bool = True
    TESTING: bool = False


class TestingConfig(Config):
    """Configuration for automated tests."""

    DEBUG: bool = True
    TESTING: bool = True

    API_BASE_URL: str = os.environ.get("TEST_API_BASE_URL", "http://taskflow-api/api/v1")
    API_TIMEOUT: int = int(os.environ.get("TEST_API_TIMEOUT", "1"))
    SECRET_KEY: str = "taskflow-web-testing-secret"


class ProductionConfig(Config):
    """Configuration for production deployments."""

    DEBUG: bool = False
    TESTING: bool = False
    SESSION_COOKIE_SECURE: bool = _env_bool("SESSION_COOKIE_SECURE", "true")


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Look up and return the configuration class for the given environment.

    Args:
        env: Environment name. When None, falls back to FLASK_ENV.

    Returns:
        The selected configuration class.
    """
    if env is None:
        env = os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
