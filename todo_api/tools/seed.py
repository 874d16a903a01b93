"""Fixture data: two users and two todos.

The first user already holds a stored ``auth`` session token; the second
todo is completed.  Used by ``python -m todo_api.tools.db seed`` and by the
test suite.
"""

from __future__ import annotations

from sqlalchemy import delete
from sqlmodel import Session

from ..auth import AUTH_ACCESS, hash_password, sign_token
from ..identifiers import new_object_id
from ..models import Todo, User, UserToken

USER_ONE_ID = new_object_id()
USER_TWO_ID = new_object_id()

USERS = [
    {
        "id": USER_ONE_ID,
        "email": "chris@example.com",
        "password": "userOnePass",
        "tokens": [{"access": AUTH_ACCESS}],
    },
    {
        "id": USER_TWO_ID,
        "email": "jason@example.com",
        "password": "userTwoPass",
        "tokens": [],
    },
]

TODOS = [
    {"id": new_object_id(), "text": "First test todo"},
    {
        "id": new_object_id(),
        "text": "Second test todo",
        "completed": True,
        "completed_at": 333,
    },
]


def populate_users(session: Session) -> None:
    """Reset the users and store a freshly signed token for each token entry.

    Tokens are signed with the secret configured at call time and written back
    into :data:`USERS` so callers can present them.
    """
    session.connection().execute(delete(UserToken))
    session.connection().execute(delete(User))
    for data in USERS:
        session.add(
            User(id=data["id"], email=data["email"], password=hash_password(data["password"]))
        )
        for position, entry in enumerate(data["tokens"]):
            entry["token"] = sign_token(data["id"], entry["access"])
            session.add(
                UserToken(
                    user_id=data["id"],
                    position=position,
                    access=entry["access"],
                    token=entry["token"],
                )
            )
    session.commit()


def populate_todos(session: Session) -> None:
    session.connection().execute(delete(Todo))
    for data in TODOS:
        session.add(Todo(**data))
    session.commit()
