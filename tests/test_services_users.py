import pytest
from sqlmodel import select

from todo_api import services
from todo_api.auth import find_by_token, verify_password
from todo_api.errors import NotFoundError, ValidationError
from todo_api.identifiers import new_object_id
from todo_api.models import Todo, User, UserToken
from todo_api.tools.seed import USERS


def test_validate_user_input_normalises_email():
    email, password = services.validate_user_input("  ann@example.com ", "secret1")
    assert email == "ann@example.com"
    assert password == "secret1"


@pytest.mark.parametrize(
    "email, password, fields",
    [
        ("test", "123test!", {"email"}),
        ("test@example.com", "12345", {"password"}),
        (None, None, {"email", "password"}),
        ("", "123test!", {"email"}),
    ],
)
def test_validate_user_input_rejects(email, password, fields):
    with pytest.raises(ValidationError) as info:
        services.validate_user_input(email, password)
    assert set(info.value.errors) == fields


def test_create_user_hashes_password(session):
    user, token = services.create_user(session, "ann@example.com", "secret1")
    assert user.password != "secret1"
    assert verify_password("secret1", user.password)
    assert find_by_token(session, token).id == user.id


def test_create_user_email_is_case_insensitive_unique(session):
    with pytest.raises(services.EmailInUseError):
        services.create_user(session, USERS[0]["email"].upper(), "123test!")
    assert len(session.exec(select(User)).all()) == 2


def test_login_appends_tokens_in_order(session):
    user, first = services.login(session, USERS[0]["email"], USERS[0]["password"])
    stored = session.exec(
        select(UserToken).where(UserToken.user_id == user.id).order_by(UserToken.position)
    ).all()
    assert [t.token for t in stored] == [USERS[0]["tokens"][0]["token"], first]
    assert [t.position for t in stored] == [0, 1]


def test_login_rejects_unknown_email(session):
    with pytest.raises(ValidationError):
        services.login(session, "nobody@example.com", "whatever")


def test_delete_user_leaves_todos(session):
    token = USERS[0]["tokens"][0]["token"]
    services.create_todo(session, "mine", creator=USERS[0]["id"])
    removed = services.delete_user(session, USERS[0]["id"])
    assert removed.email == USERS[0]["email"]

    with pytest.raises(NotFoundError):
        services.get_user(session, USERS[0]["id"])
    assert session.exec(select(UserToken).where(UserToken.token == token)).first() is None
    assert session.exec(select(Todo).where(Todo.creator == USERS[0]["id"])).first() is not None


def test_get_user_missing(session):
    with pytest.raises(NotFoundError):
        services.get_user(session, new_object_id())
