"""
Task fetching and mutation against the TaskFlow API.

:class:`TaskDataController` is a read-through layer with no cache: every
page render fetches the collection again, and every successful mutation
is followed by the view redirecting to a page that re-issues
:meth:`TaskDataController.list_tasks`.  Nothing is patched locally, so the
list on screen is always what the API last returned.

Which collection is fetched depends on the role in the session store:

- admins get ``GET /tasks`` with page/size/sort parameters
- everyone else gets ``GET /tasks/my-tasks`` (created by or assigned to
  the caller)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from flask import current_app

from .api_client import ApiClient
from .errors import (
    ApiHttpError,
    ConfirmationRequiredError,
    NotAuthenticatedError,
    PermissionDeniedError,
)
from .forms import validate_task_fields
from .models import Task, TaskStats, TaskStatus
from .session_store import SessionStore, session_store as default_session_store

logger = logging.getLogger(__name__)


def _tasks_from_payload(payload: Any) -> list[Task]:
    # The API returns a bare JSON array; a paged envelope is also accepted.
    if isinstance(payload, dict):
        payload = payload.get("content", [])
    if not isinstance(payload, list):
        raise ApiHttpError(502, "Unexpected task list response")
    try:
        return [Task.from_dict(item) for item in payload]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ApiHttpError(502, "Unexpected task list response") from exc


def _task_from_response(response) -> Task:
    try:
        return Task.from_dict(response.json())
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ApiHttpError(502, "Unexpected task response") from exc


def task_form_data(task: Task, **overrides: Any) -> dict[str, Any]:
    """
    Return the full form mapping for *task*, with *overrides* applied.

    Updates replace every mutable field, so a change to one field is sent
    together with the current values of the others.
    """
    data: dict[str, Any] = {
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "priority": task.priority.value,
        "assignedToId": task.assigned_to.id if task.assigned_to else None,
    }
    data.update(overrides)
    return data


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    """Count tasks per status for the dashboard cards."""
    tasks = list(tasks)
    return TaskStats(
        total=len(tasks),
        todo=sum(1 for task in tasks if task.status is TaskStatus.TODO),
        in_progress=sum(1 for task in tasks if task.status is TaskStatus.IN_PROGRESS),
        done=sum(1 for task in tasks if task.status is TaskStatus.DONE),
    )


def recent(tasks: Iterable[Task], limit: int = 5) -> list[Task]:
    """Return the first *limit* tasks in API order (newest first for admins)."""
    return list(tasks)[:limit]


def filter_by_status(tasks: Iterable[Task], status: str | None) -> list[Task]:
    """Keep tasks with *status*; ``None``, ``""`` or ``"ALL"`` keeps everything."""
    if not status or status.upper() == "ALL":
        return list(tasks)
    return [task for task in tasks if task.status.value == status.upper()]


class TaskDataController:
    """
    Role-aware task operations.

    Args:
        client: API client used for ``/tasks`` calls.
        store: Session store consulted for authentication and role.
    """

    def __init__(self, client: ApiClient | None = None, store: SessionStore | None = None):
        self.store = store or default_session_store
        self.client = client or ApiClient(self.store)

    def _require_session(self) -> None:
        if not self.store.is_authenticated():
            raise NotAuthenticatedError()

    def list_tasks(
        self,
        page: int | None = None,
        size: int | None = None,
        sort_by: str | None = None,
    ) -> list[Task]:
        """
        Fetch the task collection visible to the current user.

        Admins get the paginated full collection; *page*, *size* and
        *sort_by* default to ``TASK_PAGE``, ``TASK_PAGE_SIZE`` and
        ``TASK_SORT_BY``.  Other users get their own tasks and the paging
        arguments are ignored.  Tasks are returned in API order.

        Raises:
            NotAuthenticatedError: No session token.
            ApiError: The API call failed.
        """
        self._require_session()

        if self.store.is_admin():
            config = current_app.config
            params = {
                "page": config["TASK_PAGE"] if page is None else page,
                "size": config["TASK_PAGE_SIZE"] if size is None else size,
                "sortBy": sort_by or config["TASK_SORT_BY"],
            }
            response = self.client.get("/tasks", params=params)
        else:
            response = self.client.get("/tasks/my-tasks")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiHttpError(502, "Unexpected task list response") from exc
        tasks = _tasks_from_payload(payload)
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    def get_task(self, task_id: int) -> Task:
        """Fetch one task.  A missing task raises ``ApiHttpError`` (404)."""
        self._require_session()
        return _task_from_response(self.client.get(f"/tasks/{task_id}"))

    def create_task(self, fields: Mapping[str, Any]) -> Task:
        """
        Validate *fields* and create a task.

        Raises:
            ValidationError: Before any network call, when a field is invalid.
            NotAuthenticatedError: No session token.
            ApiError: The API rejected the task or could not be reached.
        """
        self._require_session()
        task_fields = validate_task_fields(fields)
        task = _task_from_response(self.client.post("/tasks", json=task_fields.to_payload()))
        logger.info("Created task id=%s", task.id)
        return task

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> Task:
        """
        Validate *fields* and replace all mutable fields of a task.

        Raises:
            ValidationError: Before any network call, when a field is invalid.
            NotAuthenticatedError: No session token.
            ApiError: The API rejected the update or could not be reached.
        """
        self._require_session()
        task_fields = validate_task_fields(fields)
        task = _task_from_response(
            self.client.put(f"/tasks/{task_id}", json=task_fields.to_payload())
        )
        logger.info("Updated task id=%s", task_id)
        return task

    def delete_task(self, task_id: int, *, confirmed: bool = False) -> None:
        """
        Delete a task after explicit confirmation.

        Only admins are offered deletion; the API checks again on its side.

        Raises:
            NotAuthenticatedError: No session token.
            ConfirmationRequiredError: *confirmed* is false; nothing is sent.
            PermissionDeniedError: The current user is not an admin;
                nothing is sent.
            ApiError: The API rejected the delete or could not be reached.
        """
        self._require_session()
        if not confirmed:
            raise ConfirmationRequiredError("Please confirm that you want to delete this task.")
        if not self.store.is_admin():
            raise PermissionDeniedError("Only administrators can delete tasks")
        self.client.delete(f"/tasks/{task_id}")
        logger.info("Deleted task id=%s", task_id)
