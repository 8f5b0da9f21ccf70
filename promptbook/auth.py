"""Session-based identity helpers.

The signed session cookie stands in for an external authentication provider;
profile logic only ever reads the session user's id.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

SessionUser = dict[str, Any]


def get_current_user(request: Request) -> SessionUser | None:
    """Return current authenticated user snapshot from session."""
    user_id = request.session.get("user_id")
    username = request.session.get("username")
    if user_id and username:
        return {"id": user_id, "name": username}
    return None


def session_user_id(user: SessionUser | None) -> Any:
    if not user:
        return None
    return user.get("id")


def sign_in(request: Request, user_id: int, name: str) -> None:
    request.session.clear()
    request.session["user_id"] = user_id
    request.session["username"] = name


def sign_out(request: Request) -> None:
    request.session.clear()
