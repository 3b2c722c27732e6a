"""
TaskFlow frontend data models.

Defines the enum types and lightweight records that mirror the TaskFlow
REST API contract.  The BFF never persists any of these: they are parsed
from API payloads for the duration of a single request and handed to the
templates.

The enums inherit from ``str`` as well as ``Enum`` so that their values
serialise naturally to JSON strings and compare directly against the plain
strings returned by the API.

Key Concepts Demonstrated:
- ``str``/``Enum`` dual inheritance for ergonomic serialisation
- Tolerant parsing of API payloads into typed records
- Contract duplication for service independence
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class Role(str, Enum):
    """
    Account roles issued by the API.

    Attributes:
        ADMIN: Sees every task and may delete tasks.
        USER: Sees only tasks they created or were assigned.
    """

    ADMIN = "ADMIN"
    USER = "USER"

    @classmethod
    def parse(cls, raw: str | None) -> Role:
        """Return the matching role, treating unknown values as ``USER``."""
        if not raw:
            return cls.USER
        try:
            return cls(str(raw).upper())
        except ValueError:
            return cls.USER


class TaskStatus(str, Enum):
    """
    Task lifecycle statuses (mirrors the API contract).

    Attributes:
        TODO: Task has been created but work has not started.
        IN_PROGRESS: Task is actively being worked on.
        DONE: Task has been finished.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class TaskPriority(str, Enum):
    """
    Task priority levels (mirrors the API contract).

    Attributes:
        LOW: Low urgency.
        MEDIUM: Normal urgency (default for new tasks).
        HIGH: High urgency.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def _parse_iso_datetime(iso_string: str | None) -> datetime | None:
    """
    Parse an ISO-8601 datetime string returned by the API.

    Handles the ``Z`` suffix by replacing it with the equivalent ``+00:00``
    offset that :meth:`datetime.fromisoformat` understands.
    """
    if not iso_string or not isinstance(iso_string, str):
        return None
    try:
        return datetime.fromisoformat(iso_string.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class Identity:
    """
    The signed-in user as reported by ``POST /auth/login``.

    Attributes:
        id: API user id.
        username: Display name.
        email: Login email.
        role: Account role.
    """

    id: int
    username: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Identity:
        """
        Build an identity from a login payload or a stored snapshot.

        Raises:
            KeyError: If ``id`` is missing.
            ValueError: If ``id`` is not an integer.
            TypeError: If *data* is not a mapping.
        """
        return cls(
            id=int(data["id"]),
            username=str(data.get("username") or ""),
            email=str(data.get("email") or ""),
            role=Role.parse(data.get("role")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable snapshot for the session cookie."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
        }


@dataclass(frozen=True, slots=True)
class UserRef:
    """A user embedded in a task payload (``createdBy`` / ``assignedTo``)."""

    id: int
    username: str
    email: str = ""
    role: Role = Role.USER

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> UserRef | None:
        if not isinstance(data, dict) or data.get("id") is None:
            return None
        return cls(
            id=int(data["id"]),
            username=str(data.get("username") or ""),
            email=str(data.get("email") or ""),
            role=Role.parse(data.get("role")),
        )


@dataclass(frozen=True, slots=True)
class Task:
    """
    A task as returned by the API.

    Attributes:
        id: API task id.
        title: Short title.
        description: Free-form description.
        status: Lifecycle status.
        priority: Priority level.
        created_by: Creator reference, when the API embeds one.
        assigned_to: Optional assignee reference.
        created_at: Creation timestamp, when provided.
        updated_at: Last modification timestamp, when provided.
    """

    id: int
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    created_by: UserRef | None = None
    assigned_to: UserRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """
        Convert an API task payload into a task record.

        Unknown status/priority strings fall back to ``TODO``/``MEDIUM``
        so that one odd row never breaks a whole list page.
        """
        try:
            status = TaskStatus(data.get("status"))
        except ValueError:
            status = TaskStatus.TODO
        try:
            priority = TaskPriority(data.get("priority"))
        except ValueError:
            priority = TaskPriority.MEDIUM

        return cls(
            id=int(data["id"]),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            status=status,
            priority=priority,
            created_by=UserRef.from_dict(data.get("createdBy")),
            assigned_to=UserRef.from_dict(data.get("assignedTo")),
            created_at=_parse_iso_datetime(data.get("createdAt")),
            updated_at=_parse_iso_datetime(data.get("updatedAt")),
        )


@dataclass(frozen=True, slots=True)
class TaskFields:
    """Validated, trimmed form values ready to be sent to the API."""

    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to_id: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the ``TaskRequest`` JSON body."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "assignedToId": self.assigned_to_id,
        }


@dataclass(frozen=True, slots=True)
class TaskStats:
    """Dashboard counters."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
