from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from .identifiers import new_object_id

if SQLModel.metadata.tables:
    SQLModel.metadata.clear()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)
    email: str = Field(index=True, unique=True)
    password: str  # bcrypt hash, never the plaintext
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class UserToken(SQLModel, table=True):
    """One entry of a user's ordered session token list."""

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="user.id", index=True, max_length=24)
    position: int = 0
    access: str
    token: str = Field(index=True)


class Todo(SQLModel, table=True):
    id: str = Field(default_factory=new_object_id, primary_key=True, max_length=24)
    text: str
    completed: bool = False
    completed_at: Optional[int] = None  # epoch milliseconds
    # plain reference; todos outlive their creator
    creator: Optional[str] = Field(default=None, max_length=24, index=True)
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
