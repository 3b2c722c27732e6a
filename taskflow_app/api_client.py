"""
HTTP gateway to the TaskFlow REST API.

Every call the frontend makes to the API goes through :class:`ApiClient`,
which joins the configured ``API_BASE_URL`` with the endpoint path,
attaches the session's bearer token, applies ``API_TIMEOUT`` and turns
failures into the typed errors from :mod:`taskflow_app.errors`.

A 401/403 answer is surfaced as :class:`ApiAuthorizationError`; the client
does not clear the session on its own.  Deciding what an expired token
means for the UI is left to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from flask import current_app

from .errors import (
    ApiAuthorizationError,
    ApiConnectionError,
    ApiHttpError,
    ApiTimeoutError,
)
from .session_store import SessionStore, session_store as default_session_store

logger = logging.getLogger(__name__)


def response_error_message(response: requests.Response, default: str) -> str:
    """
    Extract an error message from a JSON API response if possible.

    Reads the ``message`` field (falling back to ``error``) of the JSON
    body.  Returns *default* when the body is not JSON or both fields are
    missing or blank.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    if not isinstance(payload, dict):
        return default
    for key in ("message", "error"):
        message = payload.get(key)
        if isinstance(message, str) and message.strip():
            return message
    return default


class ApiClient:
    """
    Single entry point for TaskFlow API calls.

    Args:
        store: Session store used to look up the bearer token.  Defaults
            to the shared module-level store.
    """

    def __init__(self, store: SessionStore | None = None):
        self.store = store or default_session_store

    def url_for(self, path: str) -> str:
        """Join ``API_BASE_URL`` and *path* without doubling slashes."""
        return f"{current_app.config['API_BASE_URL'].rstrip('/')}/{path.lstrip('/')}"

    def auth_headers(self) -> dict[str, str]:
        token = self.store.get_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> requests.Response:
        """
        Send a request to the API and return the successful response.

        Args:
            method: HTTP method (``"GET"``, ``"POST"``, ``"PUT"``, ...).
            path: Endpoint path relative to ``API_BASE_URL``.
            json: Optional JSON body.
            params: Optional query-string parameters.

        Returns:
            The :class:`requests.Response` for any 2xx status.

        Raises:
            ApiAuthorizationError: The API answered 401 or 403.
            ApiHttpError: The API answered any other non-2xx status.
            ApiTimeoutError: No answer within ``API_TIMEOUT`` seconds.
            ApiConnectionError: The API could not be reached.
        """
        method = method.upper()
        url = self.url_for(path)
        logger.debug("%s %s params=%s", method, url, params)

        kwargs: dict[str, Any] = {}
        if json is not None:
            kwargs["json"] = json
        if params:
            kwargs["params"] = params

        try:
            response = requests.request(
                method=method,
                url=url,
                headers=self.auth_headers(),
                timeout=current_app.config["API_TIMEOUT"],
                **kwargs,
            )
        except requests.Timeout as exc:
            logger.warning("%s %s timed out", method, url)
            raise ApiTimeoutError() from exc
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiConnectionError() from exc

        if 200 <= response.status_code < 300:
            return response

        logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
        if response.status_code in (401, 403):
            raise ApiAuthorizationError(response.status_code, response_error_message(response, ""))
        raise ApiHttpError(response.status_code, response_error_message(response, ""))

    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> requests.Response:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> requests.Response:
        return self.request("DELETE", path, **kwargs)
