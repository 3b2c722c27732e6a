"""
TaskFlow web frontend application factory.

Provides the ``create_app`` factory function that assembles the TaskFlow
browser UI.  The app is a stateless Backend-for-Frontend (BFF): it serves
server-rendered HTML via Jinja templates and orchestrates calls to the
TaskFlow REST API on behalf of the browser.

The BFF never stores task data -- all persistence and authorization rules
live in the API, keeping this layer focused on session handling, form
validation and presentation.

Key Concepts Demonstrated:
- Application factory pattern (``create_app``)
- Backend-for-Frontend (BFF) architecture
- Signed-cookie session loaded once per request
- Blueprint-based route registration
- Template globals for role-based UI gating
"""

from __future__ import annotations

import logging

from flask import Flask, g, render_template

from config import get_config

from .models import TaskPriority, TaskStatus
from .permissions import evaluate
from .session_store import session_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the TaskFlow frontend application.

    Loads the configuration object for *config_name*, wires the session
    store into the request lifecycle, exposes the template helpers and
    registers the views blueprint.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            *None*, the value is read from the ``FLASK_ENV`` environment
            variable, defaulting to ``"development"``.

    Returns:
        A fully configured :class:`~flask.Flask` application instance.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating TaskFlow frontend with config: %s", config_class.__name__)

    @app.before_request
    def load_session_identity():
        session_store.load()

    @app.context_processor
    def inject_template_helpers():
        identity = g.get("identity")
        return {
            "current_user": identity,
            "signed_in": session_store.is_authenticated(),
            "is_admin": identity is not None and identity.is_admin,
            "capabilities_for": lambda task: evaluate(g.get("identity"), task),
            "statuses": TaskStatus,
            "priorities": TaskPriority,
            "flash_dismiss_ms": int(app.config["FLASH_DISMISS_SECONDS"]) * 1000,
        }

    @app.errorhandler(404)
    def not_found(_error):
        return render_template("404.html"), 404

    # Import inside the factory to avoid circular imports -- the blueprint
    # module references helpers from this package, which must exist first.
    from .routes.views import views_bp

    app.register_blueprint(views_bp)
    return app
