"""Password hashing and session tokens.

Passwords are stored as bcrypt hashes.  Session tokens are HS256 JWTs
carrying the user id and an access tag; a token only authenticates while it
is still present in the user's stored token list.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, Header
from sqlmodel import Session, select

from .config import get_bcrypt_rounds, get_jwt_secret
from .database import get_session
from .errors import AuthenticationError
from .identifiers import is_object_id
from .models import User, UserToken

logger = logging.getLogger(__name__)

AUTH_HEADER = "x-auth"
AUTH_ACCESS = "auth"
JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=get_bcrypt_rounds())
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed hash in the store
        return False


def sign_token(user_id: str, access: str = AUTH_ACCESS) -> str:
    claims = {"_id": user_id, "access": access, "iat": int(time.time())}
    return jwt.encode(claims, get_jwt_secret(), algorithm=JWT_ALGORITHM)


def generate_auth_token(session: Session, user: User, access: str = AUTH_ACCESS) -> str:
    """Sign a new token for ``user`` and append it to the stored token list."""
    token = sign_token(user.id, access)
    position = len(list_tokens(session, user.id))
    session.add(UserToken(user_id=user.id, position=position, access=access, token=token))
    session.commit()
    return token


def list_tokens(session: Session, user_id: str) -> list[UserToken]:
    stmt = (
        select(UserToken)
        .where(UserToken.user_id == user_id)
        .order_by(UserToken.position)
    )
    return list(session.exec(stmt).all())


def find_by_token(session: Session, token: str, access: str = AUTH_ACCESS) -> User:
    """Return the user owning ``token`` or raise :class:`AuthenticationError`."""
    if not token:
        raise AuthenticationError("Missing session token")
    try:
        claims = jwt.decode(token, get_jwt_secret(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected session token: %s", exc)
        raise AuthenticationError("Invalid session token") from exc

    user_id = claims.get("_id")
    if not is_object_id(user_id) or claims.get("access") != access:
        logger.warning("Rejected session token with unexpected claims")
        raise AuthenticationError("Invalid session token")

    stored = session.exec(
        select(UserToken).where(
            UserToken.user_id == user_id.lower(),
            UserToken.token == token,
            UserToken.access == access,
        )
    ).first()
    user = session.get(User, user_id.lower()) if stored else None
    if user is None:
        logger.warning("Session token for user %s is not on record", user_id)
        raise AuthenticationError("Invalid session token")
    return user


def get_current_user(
    x_auth: Optional[str] = Header(default=None, alias=AUTH_HEADER),
    session: Session = Depends(get_session),
) -> User:
    return find_by_token(session, x_auth or "")


def get_optional_user(
    x_auth: Optional[str] = Header(default=None, alias=AUTH_HEADER),
    session: Session = Depends(get_session),
) -> Optional[User]:
    """Like :func:`get_current_user` but anonymous requests yield ``None``."""
    if not x_auth:
        return None
    try:
        return find_by_token(session, x_auth)
    except AuthenticationError:
        return None
