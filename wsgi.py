"""WSGI entry point for the task frontend."""

import os

from task_frontend import create_app

app = create_app(os.getenv("FLASK_ENV", "production"))
