"""Service layer for business logic.

Each function is transport agnostic and operates directly on a SQLModel
``Session`` instance.  Domain errors from :mod:`todo_api.errors` are raised
for client mistakes; the HTTP layer maps them to status codes.

The modules re-export the most commonly used functions so imports like
``from todo_api.services import create_todo`` work.
"""

from .todos import (
    create_todo,
    list_todos,
    get_todo,
    delete_todo,
    update_todo,
    validate_todo_text,
)
from .users import (
    EmailInUseError,
    create_user,
    login,
    get_user,
    delete_user,
    validate_user_input,
)

__all__ = [
    "create_todo",
    "list_todos",
    "get_todo",
    "delete_todo",
    "update_todo",
    "validate_todo_text",
    "EmailInUseError",
    "create_user",
    "login",
    "get_user",
    "delete_user",
    "validate_user_input",
]
