"""User data access: the in-memory stub and the SQL-backed store."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from promptbook.core.config import settings
from promptbook.db import session as db_session
from promptbook.models.user import Post, User
from promptbook.schemas.user import PostRead, UserRead

STUB_USERS: tuple[tuple[int, str], ...] = (
    (1, "John Doe"),
    (2, "Jane Doe"),
    (3, "Bob Smith"),
)

STUB_POSTS: tuple[tuple[int, int, str, str], ...] = (
    (1, 1, "Summarize this article in three bullet points for a busy executive.", "#summary"),
    (2, 1, "Act as a senior Python reviewer and point out unidiomatic code.", "#code"),
    (3, 2, "Write a haiku about the first rain of autumn.", "#poetry"),
)


class UserRepository(Protocol):
    """Read-only access to users and their posts."""

    def list_users(self) -> list[UserRead]: ...

    def get_user(self, user_id: int) -> UserRead | None: ...

    def list_posts(self, user_id: int) -> list[PostRead]: ...


class InMemoryUserRepository:
    """Literal users, rebuilt on every call so no state is shared between requests."""

    def list_users(self) -> list[UserRead]:
        return [UserRead(id=user_id, name=name) for user_id, name in STUB_USERS]

    def get_user(self, user_id: int) -> UserRead | None:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def list_posts(self, user_id: int) -> list[PostRead]:
        return [
            PostRead(id=post_id, creator_id=creator_id, prompt=prompt, tag=tag)
            for post_id, creator_id, prompt, tag in STUB_POSTS
            if creator_id == user_id
        ]


class SqlUserRepository:
    """Users and posts read through SQLAlchemy sessions."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_users(self) -> list[UserRead]:
        with self._session_factory() as db:
            users = db.scalars(select(User).order_by(User.id.asc())).all()
            return [UserRead.model_validate(user) for user in users]

    def get_user(self, user_id: int) -> UserRead | None:
        with self._session_factory() as db:
            user = db.get(User, user_id)
            return UserRead.model_validate(user) if user is not None else None

    def list_posts(self, user_id: int) -> list[PostRead]:
        with self._session_factory() as db:
            posts = db.scalars(select(Post).where(Post.creator_id == user_id).order_by(Post.id.asc())).all()
            return [PostRead.model_validate(post) for post in posts]


def get_user_repository() -> UserRepository:
    """Resolve the configured user store."""
    if settings.user_store == "sql":
        return SqlUserRepository(db_session.SessionLocal)
    if settings.user_store != "memory":
        raise ValueError(f"Unknown USER_STORE: {settings.user_store!r}")
    return InMemoryUserRepository()
