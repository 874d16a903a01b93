from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from ..auth import get_optional_user
from ..database import get_session
from ..models import User
from ..schemas import TodoCreate, TodoEnvelope, TodoList, TodoRead, TodoUpdate
from ..services import todos as svc


router = APIRouter(prefix="/todos", tags=["todos"])


@router.post("", response_model=TodoRead, response_model_exclude_none=True)
def create_todo(
    payload: TodoCreate,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_optional_user),
) -> TodoRead:
    creator = current_user.id if current_user else None
    todo = svc.create_todo(session, payload.text, creator=creator)
    return TodoRead.from_model(todo)


@router.get("", response_model=TodoList, response_model_exclude_none=True)
def list_todos(session: Session = Depends(get_session)) -> TodoList:
    return TodoList(todos=[TodoRead.from_model(t) for t in svc.list_todos(session)])


@router.get("/{todo_id}", response_model=TodoEnvelope, response_model_exclude_none=True)
def get_todo(todo_id: str, session: Session = Depends(get_session)) -> TodoEnvelope:
    return TodoEnvelope(todo=TodoRead.from_model(svc.get_todo(session, todo_id)))


@router.delete("/{todo_id}", response_model=TodoEnvelope, response_model_exclude_none=True)
def delete_todo(todo_id: str, session: Session = Depends(get_session)) -> TodoEnvelope:
    return TodoEnvelope(todo=TodoRead.from_model(svc.delete_todo(session, todo_id)))


@router.patch("/{todo_id}", response_model=TodoEnvelope, response_model_exclude_none=True)
def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    session: Session = Depends(get_session),
) -> TodoEnvelope:
    changes = payload.model_dump(include=payload.model_fields_set)
    todo = svc.update_todo(session, todo_id, **changes)
    return TodoEnvelope(todo=TodoRead.from_model(todo))
