"""WSGI entry point for the TaskFlow frontend."""

import os

from taskflow_app import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
