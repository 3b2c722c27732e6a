"""
HTML view routes for the TaskFlow frontend.

Implements every user-facing route of the UI.  Route handlers stay thin:
they read the submitted form, call the auth or task controller, and turn
the outcome into a rendered template, a redirect, or a flash banner.  The
module is organised into three sections:

1. **Helpers** -- the ``login_required`` decorator and error-to-banner
   translation shared by the routes.
2. **Authentication routes** -- login, registration and logout.
3. **Dashboard and task routes** -- dashboard, list, detail, create,
   edit, and delete-with-confirmation.

Every successful mutation redirects to the task list (Post/Redirect/Get),
so the list the user sees next is always a fresh fetch from the API.

Key Concepts Demonstrated:
- Backend-for-Frontend (BFF) request orchestration
- Decorator-based access control (``login_required``)
- Graceful degradation when the API is unavailable
- Flash-message feedback for form submissions
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import (
    Blueprint,
    abort,
    current_app,
    flash,
    g,
    redirect,
    render_template,
    request,
    url_for,
)

from ..auth_flow import AuthFlowController
from ..errors import (
    ApiConnectionError,
    ApiError,
    ApiHttpError,
    AuthError,
    ConfirmationRequiredError,
    PermissionDeniedError,
    ValidationError,
)
from ..forms import validate_login, validate_registration
from ..permissions import evaluate
from ..session_store import session_store
from ..task_data import (
    TaskDataController,
    compute_stats,
    filter_by_status,
    recent,
    task_form_data,
)

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)

auth_flow = AuthFlowController()
task_data = TaskDataController()

STATUS_FILTERS = ("ALL", "TODO", "IN_PROGRESS", "DONE")


# =====================================================================
# Helpers
# =====================================================================


def login_required(view_func):
    """
    Decorator that requires a session token for view routes.

    Unauthenticated visitors are redirected to the login page before the
    wrapped view (and therefore any API call) runs.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        if not session_store.is_authenticated():
            return redirect(url_for("views.login"))
        return view_func(*args, **kwargs)

    return wrapper


def _api_error_message(error: ApiError, default: str) -> str:
    """
    Pick the banner text for a failed API call.

    Connectivity failures always get *default*; HTTP failures show the
    server's message when it sent one.
    """
    if isinstance(error, ApiHttpError) and error.server_message:
        return error.server_message
    return default


def _api_error_status(error: ApiError) -> int:
    """Map an API failure to the status code of the rendered page."""
    if isinstance(error, ApiConnectionError):
        return 503
    if isinstance(error, ApiHttpError) and 400 <= error.status_code < 500:
        return error.status_code
    return 502


def _render_task_form(task_id: int | None, form_data: dict, errors: dict, status_code: int = 200):
    if task_id is None:
        form_action = url_for("views.create_task")
        form_title = "Create New Task"
    else:
        form_action = url_for("views.update_task", task_id=task_id)
        form_title = "Edit Task"
    return (
        render_template(
            "task_form.html",
            task_id=task_id,
            form=form_data,
            errors=errors,
            form_action=form_action,
            form_title=form_title,
        ),
        status_code,
    )


# =====================================================================
# Authentication Routes
# =====================================================================


@views_bp.route("/health", methods=["GET"])
def health_check():
    """Public liveness probe."""
    return {"status": "healthy", "service": "taskflow-web"}, 200


@views_bp.route("/")
def index():
    if session_store.is_authenticated():
        return redirect(url_for("views.dashboard"))
    return redirect(url_for("views.login"))


@views_bp.route("/login", methods=["GET"])
def login():
    """
    Render the login page.

    Visitors who already hold a session token go straight to the
    dashboard.
    """
    if session_store.is_authenticated():
        return redirect(url_for("views.dashboard"))
    return render_template("login.html", form={}, errors={})


@views_bp.route("/login", methods=["POST"])
def login_submit():
    """
    Handle login form submission.

    Blank fields are rejected locally.  Otherwise the credentials go to
    the API; on success the session is stored and the user lands on the
    dashboard, on failure the form is shown again with the message.
    """
    form_data = {"email": request.form.get("email", "")}
    try:
        email, password = validate_login(request.form)
    except ValidationError as error:
        flash(error.message, "error")
        return render_template("login.html", form=form_data, errors=error.field_errors), 400

    try:
        identity = auth_flow.login(email, password)
    except AuthError as error:
        flash(error.message, "error")
        return render_template("login.html", form=form_data, errors={}), 401
    except ApiConnectionError as error:
        flash(error.message, "error")
        return render_template("login.html", form=form_data, errors={}), 503

    flash(f"Welcome back, {identity.username}!", "success")
    return redirect(url_for("views.dashboard"))


@views_bp.route("/register", methods=["GET"])
def register():
    """Render the registration page (signed-in users go to the dashboard)."""
    if session_store.is_authenticated():
        return redirect(url_for("views.dashboard"))
    return render_template("register.html", form={}, errors={})


@views_bp.route("/register", methods=["POST"])
def register_submit():
    """
    Handle registration form submission.

    Registration does not sign the user in: on success they are sent to
    the login page with a confirmation banner.
    """
    form_data = {
        "username": request.form.get("username", ""),
        "email": request.form.get("email", ""),
    }
    try:
        username, email, password = validate_registration(request.form)
    except ValidationError as error:
        return render_template("register.html", form=form_data, errors=error.field_errors), 400

    try:
        auth_flow.register(username, email, password)
    except AuthError as error:
        flash(error.message, "error")
        return render_template("register.html", form=form_data, errors={}), 400
    except ApiConnectionError as error:
        flash(error.message, "error")
        return render_template("register.html", form=form_data, errors={}), 503

    flash("Registration successful! Please login.", "success")
    return redirect(url_for("views.login"))


@views_bp.route("/logout", methods=["POST"])
def logout():
    """Clear the session and return to the login page."""
    auth_flow.logout()
    flash("Logged out. Session cleared.", "success")
    return redirect(url_for("views.login"))


# =====================================================================
# Dashboard and Task Routes
# =====================================================================


@views_bp.route("/dashboard")
@login_required
def dashboard():
    """
    Render the dashboard: status counters and the most recent tasks.

    A failed fetch does not block the page; it is logged and the
    dashboard shows the empty state.
    """
    try:
        tasks = task_data.list_tasks()
    except ApiError as error:
        logger.warning("Dashboard task fetch failed: %s", error.message)
        tasks = []

    return render_template(
        "dashboard.html",
        stats=compute_stats(tasks),
        recent_tasks=recent(tasks, current_app.config["DASHBOARD_RECENT_LIMIT"]),
    )


@views_bp.route("/tasks", methods=["GET"])
@login_required
def task_list():
    """
    Render the task list with an optional status filter.

    The ``status`` query parameter filters the fetched list
    (``ALL``/``TODO``/``IN_PROGRESS``/``DONE``).  Admins may also pass
    ``page``, ``size`` and ``sortBy``, which are forwarded to the API.
    """
    status_filter = request.args.get("status", "ALL").upper()
    if status_filter not in STATUS_FILTERS:
        status_filter = "ALL"

    status_code = 200
    try:
        tasks = task_data.list_tasks(
            page=request.args.get("page", type=int),
            size=request.args.get("size", type=int),
            sort_by=request.args.get("sortBy") or None,
        )
    except ApiError as error:
        flash(_api_error_message(error, "Failed to fetch tasks"), "error")
        tasks = []
        status_code = _api_error_status(error)

    return (
        render_template(
            "tasks.html",
            tasks=filter_by_status(tasks, status_filter),
            status_filters=STATUS_FILTERS,
            current_status=status_filter,
        ),
        status_code,
    )


@views_bp.route("/tasks/new")
@login_required
def new_task():
    """Render the empty task creation form."""
    return _render_task_form(None, {}, {})


@views_bp.route("/tasks", methods=["POST"])
@login_required
def create_task():
    """
    Handle task creation.

    Invalid fields re-render the form with inline errors and nothing is
    sent.  On success the browser is redirected to the task list.
    """
    try:
        task_data.create_task(request.form)
    except ValidationError as error:
        return _render_task_form(None, request.form.to_dict(), error.field_errors, 400)
    except ApiError as error:
        flash(_api_error_message(error, "Failed to create task"), "error")
        return _render_task_form(None, request.form.to_dict(), {}, _api_error_status(error))

    flash("Task created successfully!", "success")
    return redirect(url_for("views.task_list"))


@views_bp.route("/tasks/<int:task_id>")
@login_required
def view_task(task_id: int):
    """Render the read-only task detail page."""
    try:
        task = task_data.get_task(task_id)
    except ApiHttpError as error:
        if error.status_code == 404:
            abort(404)
        flash(_api_error_message(error, "Failed to load task"), "error")
        return redirect(url_for("views.task_list"))
    except ApiError as error:
        flash(_api_error_message(error, "Failed to load task"), "error")
        return redirect(url_for("views.task_list"))

    return render_template("task_detail.html", task=task)


@views_bp.route("/tasks/<int:task_id>/edit")
@login_required
def edit_task(task_id: int):
    """Render the edit form pre-filled with the task's current values."""
    try:
        task = task_data.get_task(task_id)
    except ApiHttpError as error:
        if error.status_code == 404:
            abort(404)
        flash(_api_error_message(error, "Failed to load task"), "error")
        return redirect(url_for("views.task_list"))
    except ApiError as error:
        flash(_api_error_message(error, "Failed to load task"), "error")
        return redirect(url_for("views.task_list"))

    if not evaluate(g.identity, task).can_edit:
        flash("You can only edit tasks you created.", "error")
        return redirect(url_for("views.task_list"))

    return _render_task_form(task_id, task_form_data(task), {})


@views_bp.route("/tasks/<int:task_id>", methods=["POST"])
@login_required
def update_task(task_id: int):
    """
    Handle the edit form submission.

    All mutable fields are replaced with the submitted values.  The API
    re-checks that the caller is an admin or the task's creator.
    """
    try:
        task_data.update_task(task_id, request.form)
    except ValidationError as error:
        return _render_task_form(task_id, request.form.to_dict(), error.field_errors, 400)
    except ApiError as error:
        flash(_api_error_message(error, "Failed to update task"), "error")
        return _render_task_form(task_id, request.form.to_dict(), {}, _api_error_status(error))

    flash("Task updated successfully!", "success")
    return redirect(url_for("views.task_list"))


@views_bp.route("/tasks/<int:task_id>/delete", methods=["GET"])
@login_required
def confirm_delete(task_id: int):
    """Ask the user to confirm a deletion before anything is sent."""
    try:
        task = task_data.get_task(task_id)
    except ApiHttpError as error:
        if error.status_code == 404:
            abort(404)
        flash(_api_error_message(error, "Failed to load task"), "error")
        return redirect(url_for("views.task_list"))
    except ApiError as error:
        flash(_api_error_message(error, "Failed to load task"), "error")
        return redirect(url_for("views.task_list"))

    if not evaluate(g.identity, task).can_delete:
        flash("Only administrators can delete tasks", "error")
        return redirect(url_for("views.task_list"))

    return render_template("confirm_delete.html", task=task)


@views_bp.route("/tasks/<int:task_id>/delete", methods=["POST"])
@login_required
def delete_task(task_id: int):
    """
    Delete a task once the confirmation field is present.

    Without ``confirm=yes`` the user is sent back to the confirmation page
    and no request reaches the API.
    """
    confirmed = request.form.get("confirm") == "yes"
    try:
        task_data.delete_task(task_id, confirmed=confirmed)
    except ConfirmationRequiredError as error:
        flash(error.message, "error")
        return redirect(url_for("views.confirm_delete", task_id=task_id))
    except PermissionDeniedError as error:
        flash(error.message, "error")
        return redirect(url_for("views.task_list"))
    except ApiError as error:
        flash(_api_error_message(error, "Failed to delete task"), "error")
        return redirect(url_for("views.task_list"))

    flash("Task deleted successfully!", "success")
    return redirect(url_for("views.task_list"))
