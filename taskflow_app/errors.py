"""
Error types raised by the TaskFlow frontend controllers.

Controllers raise; view routes catch and turn the error into a flash
banner or an inline form message with a matching HTTP status code.  The hierarchy
separates the four failure families the UI has to tell apart:

1. **Validation** -- local, field-level, never reaches the network.
2. **Authentication** -- bad credentials or a rejected registration.
3. **Authorization** -- the API (or a client-side gate) refused the action.
4. **Connectivity** -- the API could not be reached at all.

Upstream failures derive from :class:`RuntimeError`, matching how the
route helpers report unexpected downstream status codes.
"""

from __future__ import annotations


class TaskFlowError(Exception):
    """Base class for every error raised by the frontend controllers."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskFlowError):
    """
    Local form validation failed; nothing was sent to the API.

    Attributes:
        field_errors: Mapping of form field name to a user-facing message.
    """

    default_message = "Please correct the highlighted fields."

    def __init__(self, field_errors: dict[str, str], message: str | None = None):
        self.field_errors = dict(field_errors)
        super().__init__(message)


class AuthError(TaskFlowError):
    """Login or registration was rejected by the API."""

    default_message = "Invalid email or password"


class NotAuthenticatedError(TaskFlowError):
    """A protected operation was attempted without a session token."""

    default_message = "Please log in to continue."


class PermissionDeniedError(TaskFlowError):
    """A client-side permission gate refused the action."""

    default_message = "You don't have permission to perform this action."


class ConfirmationRequiredError(TaskFlowError):
    """A destructive action was requested without explicit confirmation."""

    default_message = "Please confirm this action before continuing."


class ApiError(TaskFlowError, RuntimeError):
    """Base class for failures talking to the TaskFlow API."""

    default_message = "TaskFlow service error. Please try again."


class ApiHttpError(ApiError):
    """
    The API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the API.
        server_message: The message from the response body, or ``None``
            when the body carried none.
    """

    def __init__(self, status_code: int, server_message: str | None = None):
        self.status_code = status_code
        self.server_message = server_message or None
        super().__init__(server_message)


class ApiAuthorizationError(ApiHttpError):
    """The API answered 401 or 403."""

    default_message = "You are not authorized to perform this action."


class ApiConnectionError(ApiError):
    """The API could not be reached (refused or reset connection)."""

    default_message = "TaskFlow service unavailable. Please try again later."


class ApiTimeoutError(ApiConnectionError):
    """The API did not answer within the configured timeout."""

    default_message = "TaskFlow service timed out. Please try again."
