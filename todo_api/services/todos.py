"""Todo service helpers."""

from __future__ import annotations

import logging
import time
from typing import List, Optional

from sqlmodel import Session, select

from ..errors import NotFoundError, ValidationError
from ..identifiers import parse_object_id
from ..models import Todo

logger = logging.getLogger(__name__)

_UNSET = object()


def now_ms() -> int:
    return int(time.time() * 1000)


def validate_todo_text(text: object) -> str:
    """Return the trimmed todo text or raise :class:`ValidationError`."""
    if text is None:
        raise ValidationError("Todo validation failed", {"text": "Path `text` is required."})
    if not isinstance(text, str):
        raise ValidationError("Todo validation failed", {"text": "Text must be a string."})
    text = text.strip()
    if not text:
        raise ValidationError(
            "Todo validation failed", {"text": "Text must be at least 1 character long."}
        )
    return text


def create_todo(session: Session, text: object, creator: Optional[str] = None) -> Todo:
    """Create and persist a new :class:`Todo`.

    Parameters
    ----------
    session:
        Active database session.
    text:
        Raw text from the request.  Surrounding whitespace is stripped and the
        result must not be empty.
    creator:
        Optional id of the user creating the todo.
    """

    todo = Todo(text=validate_todo_text(text), creator=creator)
    session.add(todo)
    session.commit()
    session.refresh(todo)
    logger.info("Created todo %s", todo.id)
    return todo


def list_todos(session: Session) -> List[Todo]:
    stmt = select(Todo).order_by(Todo.created_at, Todo.id)
    return list(session.exec(stmt).all())


def get_todo(session: Session, todo_id: str) -> Todo:
    """Return the todo with ``todo_id``.

    Raises :class:`~todo_api.identifiers.InvalidObjectIdError` when the id is
    malformed and :class:`NotFoundError` when no such todo exists.
    """
    todo = session.get(Todo, parse_object_id(todo_id))
    if todo is None:
        raise NotFoundError("Todo not found")
    return todo


def delete_todo(session: Session, todo_id: str) -> Todo:
    todo = get_todo(session, todo_id)
    removed = Todo(**todo.model_dump())
    session.delete(todo)
    session.commit()
    logger.info("Deleted todo %s", removed.id)
    return removed


def update_todo(
    session: Session,
    todo_id: str,
    *,
    text: object = _UNSET,
    completed: object = _UNSET,
) -> Todo:
    """Apply a partial update to a todo.

    Only the fields that are passed are touched.  Marking an open todo as
    completed stamps ``completed_at`` with the current time; marking it as not
    completed clears the stamp.
    """

    todo = get_todo(session, todo_id)
    # validate everything before touching the identity-mapped row
    if text is not _UNSET:
        text = validate_todo_text(text)
    if completed is not _UNSET and not isinstance(completed, bool):
        raise ValidationError(
            "Todo validation failed", {"completed": "Completed must be a boolean."}
        )

    if text is not _UNSET:
        todo.text = text
    if completed is not _UNSET:
        if completed and (not todo.completed or todo.completed_at is None):
            todo.completed_at = now_ms()
        elif not completed:
            todo.completed_at = None
        todo.completed = completed
    session.add(todo)
    session.commit()
    session.refresh(todo)
    return todo
