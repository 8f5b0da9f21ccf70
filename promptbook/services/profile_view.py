"""Profile page state: parameter parsing and the keyed posts load."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from promptbook.auth import SessionUser, session_user_id
from promptbook.services.posts_client import PostsClient, PostsErr

logger = logging.getLogger(__name__)

ANONYMOUS_NAME = "Anonymous"
USER_ID_PATTERN = re.compile(r"[0-9]+")


def welcome_message(name: str) -> str:
    return f"Welcome to {name}'s personalized profile page!"


@dataclass(frozen=True)
class ProfileParams:
    """Route and query values after boundary validation."""

    raw_id: str | None
    user_id: int | None
    name: str | None

    def display_name(self, fallback: str | None = None) -> str:
        return self.name or fallback or ANONYMOUS_NAME


def parse_user_id(raw: str | None) -> int | None:
    """Parse a positive user id written in ASCII digits, else return ``None``."""
    cleaned = (raw or "").strip()
    if not USER_ID_PATTERN.fullmatch(cleaned):
        return None
    user_id = int(cleaned)
    return user_id if user_id > 0 else None


def parse_profile_params(raw_id: str | None, raw_name: str | None) -> ProfileParams:
    """Parse the routed user id and the optional display name.

    Ids that are missing, non-numeric or not positive become ``None``; a blank
    name becomes ``None``.
    """
    user_id = parse_user_id(raw_id)
    name = (raw_name or "").strip() or None
    return ProfileParams(raw_id=raw_id, user_id=user_id, name=name)


class ProfileState(str, Enum):
    AWAITING_SESSION = "awaiting_session"
    INVALID_ROUTE = "invalid_route"
    LOADED = "loaded"
    FAILED = "failed"


class ProfileView:
    """Posts for one profile, reloaded when the route id or session user changes."""

    def __init__(self) -> None:
        self.state: ProfileState = ProfileState.AWAITING_SESSION
        self.posts: Any = []
        self.error: PostsErr | None = None
        self._loaded_key: tuple[int | None, Any] | None = None

    async def sync(
        self,
        params: ProfileParams,
        session_user: SessionUser | None,
        client: PostsClient,
    ) -> ProfileState:
        key = (params.user_id, session_user_id(session_user))
        if key == self._loaded_key:
            return self.state
        self._loaded_key = key

        if params.user_id is None:
            self._reset(ProfileState.INVALID_ROUTE)
            return self.state
        if key[1] is None:
            self._reset(ProfileState.AWAITING_SESSION)
            return self.state

        # Gated on the session user but keyed by the routed profile id.
        result = await client.fetch_posts(params.user_id)
        if isinstance(result, PostsErr):
            logger.warning("[PROFILE] posts for user %s unavailable: %s", params.user_id, result.kind.value)
            self.posts = []
            self.error = result
            self.state = ProfileState.FAILED
        else:
            self.posts = result.posts
            self.error = None
            self.state = ProfileState.LOADED
        return self.state

    def _reset(self, state: ProfileState) -> None:
        self.posts = []
        self.error = None
        self.state = state
