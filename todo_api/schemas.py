"""Request and response bodies for the HTTP layer.

Responses use the document field names clients see (``_id``,
``completedAt``); routes are declared with ``response_model_exclude_none``
so unset optional fields are omitted instead of sent as ``null``.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Todo, User


class TodoCreate(BaseModel):
    text: Any = None


class TodoUpdate(BaseModel):
    text: Any = None
    completed: Any = None


class TodoRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    text: str
    completed: bool = False
    completed_at: Optional[int] = Field(default=None, alias="completedAt")
    creator: Optional[str] = None

    @classmethod
    def from_model(cls, todo: Todo) -> "TodoRead":
        return cls(
            id=todo.id,
            text=todo.text,
            completed=todo.completed,
            completed_at=todo.completed_at if todo.completed else None,
            creator=todo.creator,
        )


class TodoEnvelope(BaseModel):
    todo: TodoRead


class TodoList(BaseModel):
    todos: List[TodoRead]


class Credentials(BaseModel):
    email: Any = None
    password: Any = None


class UserRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    email: str

    @classmethod
    def from_model(cls, user: User) -> "UserRead":
        return cls(id=user.id, email=user.email)
