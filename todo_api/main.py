"""Application entrypoint.

Configures logging and re-exports the API application so ``uvicorn
todo_api.main:app`` serves the routes defined in :mod:`todo_api.api`.
"""

from __future__ import annotations

from .api import app as app
from .config import configure_logging

configure_logging()
