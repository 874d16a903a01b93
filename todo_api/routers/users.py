from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlmodel import Session

from ..auth import AUTH_HEADER, get_current_user
from ..database import get_session
from ..models import User
from ..schemas import Credentials, UserRead
from ..services import users as svc


router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserRead)
@router.post("/", response_model=UserRead, include_in_schema=False)
def create_user(
    payload: Credentials,
    response: Response,
    session: Session = Depends(get_session),
) -> UserRead:
    user, token = svc.create_user(session, payload.email, payload.password)
    response.headers[AUTH_HEADER] = token
    return UserRead.from_model(user)


@router.post("/login", response_model=UserRead)
def login(
    payload: Credentials,
    response: Response,
    session: Session = Depends(get_session),
) -> UserRead:
    user, token = svc.login(session, payload.email, payload.password)
    response.headers[AUTH_HEADER] = token
    return UserRead.from_model(user)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(get_current_user)) -> UserRead:
    return UserRead.from_model(current_user)


@router.delete("/me", response_model=UserRead)
def delete_me(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
) -> UserRead:
    return UserRead.from_model(svc.delete_user(session, current_user.id))
