"""
Session store for the signed-in identity and its bearer token.

The browser session cookie is the durable client-side storage: Flask signs
it with ``SECRET_KEY`` and, because the session is marked permanent, the
browser keeps it across restarts for ``PERMANENT_SESSION_LIFETIME``.  This
module is the only code that reads or writes the cookie keys, so every
other component goes through the small API below.

Key Concepts Demonstrated:
- Single owner for global session state
- Signed-cookie persistence via ``flask.session``
- Per-request identity loading onto ``flask.g``
"""

from __future__ import annotations

import logging

from flask import g, session

from .models import Identity

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionStore:
    """
    Read/write access to the current browser session.

    All methods operate on the session of the active Flask request, so a
    single module-level instance can be shared by every controller.
    """

    def set_session(self, identity: Identity, token: str) -> None:
        """Persist *identity* and *token*; queries reflect them immediately."""
        session[TOKEN_KEY] = token
        session[USER_KEY] = identity.to_dict()
        session.permanent = True
        g.identity = identity
        logger.info("Session started for user id=%s role=%s", identity.id, identity.role.value)

    def clear_session(self) -> None:
        """Remove identity and token.  Safe to call when already cleared."""
        had_token = session.pop(TOKEN_KEY, None) is not None
        session.pop(USER_KEY, None)
        g.identity = None
        if had_token:
            logger.info("Session cleared")

    def get_token(self) -> str | None:
        token = session.get(TOKEN_KEY)
        return token or None

    def get_current_identity(self) -> Identity | None:
        """
        Return the stored identity, or ``None`` when there is none.

        A snapshot that cannot be parsed (tampered or written by an older
        release) is reported as missing rather than raising.
        """
        if "identity" in g:
            return g.identity
        return self._load_identity()

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def is_admin(self) -> bool:
        identity = self.get_current_identity()
        return identity is not None and identity.is_admin

    def load(self) -> None:
        """Load the stored identity onto ``flask.g`` for this request."""
        g.identity = self._load_identity()

    def _load_identity(self) -> Identity | None:
        raw = session.get(USER_KEY)
        if not raw:
            return None
        try:
            return Identity.from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("Ignoring unreadable identity snapshot in session")
            return None


session_store = SessionStore()
