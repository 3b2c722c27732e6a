"""
Client-side form validation.

Each ``validate_*`` function takes the submitted form mapping, returns the
cleaned values, and raises :class:`~taskflow_app.errors.ValidationError`
with one message per offending field.  Nothing here touches the network:
a form that fails validation is never sent to the API.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from .errors import ValidationError
from .models import TaskFields, TaskPriority, TaskStatus

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(form: Mapping[str, Any], name: str) -> str:
    value = form.get(name)
    if value is None:
        return ""
    return str(value).strip()


def validate_login(form: Mapping[str, Any]) -> tuple[str, str]:
    """Return ``(email, password)`` or raise on blank fields."""
    email = _text(form, "email")
    password = str(form.get("password") or "")

    errors: dict[str, str] = {}
    if not email:
        errors["email"] = "Email is required"
    if not password:
        errors["password"] = "Password is required"
    if errors:
        raise ValidationError(errors, "Email and password are required.")
    return email, password


def validate_registration(form: Mapping[str, Any]) -> tuple[str, str, str]:
    """
    Return ``(username, email, password)`` for a valid registration form.

    Rules: username at least 3 characters, a plausible email address, and
    a password of at least 6 characters.
    """
    username = _text(form, "username")
    email = _text(form, "email")
    password = str(form.get("password") or "")

    errors: dict[str, str] = {}
    if not username:
        errors["username"] = "Username is required"
    elif len(username) < USERNAME_MIN_LENGTH:
        errors["username"] = f"Username must be at least {USERNAME_MIN_LENGTH} characters"

    if not email:
        errors["email"] = "Email is required"
    elif not _EMAIL_RE.match(email):
        errors["email"] = "Enter a valid email address"

    if not password:
        errors["password"] = "Password is required"
    elif len(password) < PASSWORD_MIN_LENGTH:
        errors["password"] = f"Password must be at least {PASSWORD_MIN_LENGTH} characters"

    if errors:
        raise ValidationError(errors)
    return username, email, password


def validate_task_fields(form: Mapping[str, Any]) -> TaskFields:
    """
    Validate task form values and return them trimmed and typed.

    Title and description are required after trimming.  Status and
    priority default to ``TODO`` and ``MEDIUM`` when omitted; unknown
    values are rejected.  ``assignedToId`` is optional and must be a
    positive integer when present.

    Raises:
        ValidationError: One or more fields are invalid.
    """
    title = _text(form, "title")
    description = _text(form, "description")

    errors: dict[str, str] = {}
    if not title:
        errors["title"] = "Title is required"
    elif len(title) > TITLE_MAX_LENGTH:
        errors["title"] = f"Title must be {TITLE_MAX_LENGTH} characters or less"

    if not description:
        errors["description"] = "Description is required"
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less"

    status = TaskStatus.TODO
    raw_status = _text(form, "status")
    if raw_status:
        try:
            status = TaskStatus(raw_status.upper())
        except ValueError:
            errors["status"] = "Invalid status"

    priority = TaskPriority.MEDIUM
    raw_priority = _text(form, "priority")
    if raw_priority:
        try:
            priority = TaskPriority(raw_priority.upper())
        except ValueError:
            errors["priority"] = "Invalid priority"

    assigned_to_id = None
    raw_assignee = _text(form, "assignedToId")
    if raw_assignee:
        try:
            assigned_to_id = int(raw_assignee)
        except ValueError:
            errors["assignedToId"] = "Assignee must be a user id"
        else:
            if assigned_to_id < 1:
                errors["assignedToId"] = "Assignee must be a user id"

    if errors:
        raise ValidationError(errors)

    return TaskFields(
        title=title,
        description=description,
        status=status,
        priority=priority,
        assigned_to_id=assigned_to_id,
    )
