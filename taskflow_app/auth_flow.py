"""
Register, login and logout orchestration.

:class:`AuthFlowController` forwards credentials to the API's ``/auth``
endpoints and is the only component that mutates the session store.
Field-level checks (minimum lengths, blank values) happen in
:mod:`taskflow_app.forms` before these methods are called.
"""

from __future__ import annotations

import logging

from .api_client import ApiClient
from .errors import ApiHttpError, AuthError
from .models import Identity
from .session_store import SessionStore, session_store as default_session_store

logger = logging.getLogger(__name__)

REGISTER_FAILED_MESSAGE = "Registration failed"
LOGIN_FAILED_MESSAGE = "Invalid email or password"
BAD_LOGIN_RESPONSE_MESSAGE = "Invalid login response received."


class AuthFlowController:
    """
    Account flows against the TaskFlow API.

    Args:
        client: API client used for the ``/auth`` calls.
        store: Session store updated on login and logout.
    """

    def __init__(self, client: ApiClient | None = None, store: SessionStore | None = None):
        self.store = store or default_session_store
        self.client = client or ApiClient(self.store)

    def register(self, username: str, email: str, password: str) -> None:
        """
        Create an account.  Does not log the new user in.

        Raises:
            AuthError: The API rejected the registration (duplicate
                username/email, invalid fields).
            ApiConnectionError: The API could not be reached.
        """
        try:
            self.client.post(
                "/auth/register",
                json={"username": username, "email": email, "password": password},
            )
        except ApiHttpError as exc:
            logger.info("Registration rejected with HTTP %s", exc.status_code)
            raise AuthError(exc.server_message or REGISTER_FAILED_MESSAGE) from exc
        logger.info("Registered account for %s", email)

    def login(self, email: str, password: str) -> Identity:
        """
        Authenticate and start a session.

        On success the identity fields and token from the response are
        written to the session store.  On failure the session is left as
        it was.

        Returns:
            The identity of the signed-in user.

        Raises:
            AuthError: Wrong credentials or an unusable login response.
            ApiConnectionError: The API could not be reached.
        """
        try:
            response = self.client.post(
                "/auth/login", json={"email": email, "password": password}
            )
        except ApiHttpError as exc:
            logger.info("Login rejected with HTTP %s", exc.status_code)
            raise AuthError(exc.server_message or LOGIN_FAILED_MESSAGE) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthError(BAD_LOGIN_RESPONSE_MESSAGE) from exc

        token = payload.get("token") if isinstance(payload, dict) else None
        if not token:
            raise AuthError(BAD_LOGIN_RESPONSE_MESSAGE)
        try:
            identity = Identity.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthError(BAD_LOGIN_RESPONSE_MESSAGE) from exc

        self.store.set_session(identity, token)
        return identity

    def logout(self) -> None:
        """Forget the session locally.  No API call; idempotent."""
        self.store.clear_session()
