"""HTTP client for the per-user posts resource."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx

logger = logging.getLogger(__name__)

IN_PROCESS_BASE_URL = "http://promptbook.internal"


class PostsErrorKind(str, Enum):
    FETCH_FAILED = "fetch_failed"
    DECODE_FAILED = "decode_failed"


@dataclass(frozen=True)
class PostsOk:
    posts: Any = field(default_factory=list)


@dataclass(frozen=True)
class PostsErr:
    kind: PostsErrorKind
    detail: str = ""


PostsResult = PostsOk | PostsErr


def posts_path(user_id: int | str) -> str:
    return f"/api/users/{user_id}/posts"


class PostsClient:
    """Fetch a user's posts and report failures as values instead of exceptions.

    The response body is returned as parsed JSON without schema checks; callers
    treat it as an opaque collection.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not base_url and transport is None:
            raise ValueError("An in-process posts client needs an explicit transport")
        self.base_url = base_url or IN_PROCESS_BASE_URL
        self.timeout = timeout
        self._transport = transport

    async def fetch_posts(self, user_id: int | str) -> PostsResult:
        path = posts_path(user_id)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(path)
        except httpx.TimeoutException as exc:
            logger.warning("[POSTS] timed out fetching %s after %.1fs", path, self.timeout)
            return PostsErr(PostsErrorKind.FETCH_FAILED, f"Timed out: {exc}")
        except httpx.HTTPError as exc:
            logger.warning("[POSTS] request to %s failed: %s", path, exc)
            return PostsErr(PostsErrorKind.FETCH_FAILED, str(exc))

        if not response.is_success:
            logger.warning("[POSTS] %s answered HTTP %s", path, response.status_code)
            return PostsErr(PostsErrorKind.FETCH_FAILED, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("[POSTS] %s returned a body that is not JSON: %s", path, exc)
            return PostsErr(PostsErrorKind.DECODE_FAILED, "Response body is not valid JSON")

        logger.debug("[POSTS] loaded posts for user %s", user_id)
        return PostsOk(data)
