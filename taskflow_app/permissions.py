"""
Role-based capability checks for task actions.

Every template and route asks :func:`evaluate` which actions to offer for
a task instead of re-deriving the rules.  These are presentation gates:
the API enforces the same rules and remains authoritative.

Rules:
- edit: admins, or the user who created the task
- delete: admins only
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Identity, Task


@dataclass(frozen=True, slots=True)
class Capabilities:
    can_edit: bool = False
    can_delete: bool = False


NO_CAPABILITIES = Capabilities()


def evaluate(identity: Identity | None, task: Task) -> Capabilities:
    """Return what *identity* may do with *task*."""
    if identity is None:
        return NO_CAPABILITIES
    if identity.is_admin:
        return Capabilities(can_edit=True, can_delete=True)
    is_creator = task.created_by is not None and task.created_by.id == identity.id
    return Capabilities(can_edit=is_creator, can_delete=False)
