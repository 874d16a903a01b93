"""User account service helpers."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..auth import generate_auth_token, hash_password, verify_password
from ..errors import NotFoundError, ValidationError
from ..identifiers import parse_object_id
from ..models import User, UserToken

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


class EmailInUseError(ValidationError):
    """Raised when attempting to register an email twice."""

    def __init__(self, email: str):
        super().__init__(
            "User validation failed", {"email": f"{email} is already registered."}
        )


def _find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(
        select(User).where(func.lower(User.email) == email.lower())
    ).first()


def validate_user_input(email: object, password: object) -> Tuple[str, str]:
    """Check the sign-up fields and return the normalised email and password.

    All failing fields are collected into one :class:`ValidationError`.
    """

    errors: Dict[str, str] = {}
    clean_email = ""
    if not isinstance(email, str) or not email.strip():
        errors["email"] = "Path `email` is required."
    else:
        clean_email = email.strip()
        try:
            _email_adapter.validate_python(clean_email)
        except PydanticValidationError:
            errors["email"] = f"{clean_email} is not a valid email."

    if not isinstance(password, str) or not password:
        errors["password"] = "Path `password` is required."
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = (
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )

    if errors:
        raise ValidationError("User validation failed", errors)
    return clean_email, password  # type: ignore[return-value]


def create_user(session: Session, email: object, password: object) -> Tuple[User, str]:
    """Register a user and issue its first session token.

    The password is hashed here, before the row is built, so the plaintext is
    never handed to the store.  Returns the persisted user and the token.
    """

    clean_email, plain = validate_user_input(email, password)
    if _find_by_email(session, clean_email):
        raise EmailInUseError(clean_email)

    user = User(email=clean_email, password=hash_password(plain))
    session.add(user)
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        # lost a race with a concurrent sign-up
        raise EmailInUseError(clean_email) from exc
    session.refresh(user)

    token = generate_auth_token(session, user)
    logger.info("Registered user %s", user.id)
    return user, token


def login(session: Session, email: object, password: object) -> Tuple[User, str]:
    """Check credentials and issue a new session token."""
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError("Invalid email or password")
    user = _find_by_email(session, email.strip())
    if user is None or not verify_password(password, user.password):
        raise ValidationError("Invalid email or password")
    token = generate_auth_token(session, user)
    logger.info("User %s logged in", user.id)
    return user, token


def get_user(session: Session, user_id: str) -> User:
    user = session.get(User, parse_object_id(user_id))
    if user is None:
        raise NotFoundError("User not found")
    return user


def delete_user(session: Session, user_id: str) -> User:
    """Remove a user and its stored tokens.

    Todos created by the user are left untouched.
    """

    user = get_user(session, user_id)
    removed = User(**user.model_dump())
    for token in session.exec(select(UserToken).where(UserToken.user_id == user.id)).all():
        session.delete(token)
    session.flush()
    session.delete(user)
    session.commit()
    logger.info("Deleted user %s", removed.id)
    return removed

