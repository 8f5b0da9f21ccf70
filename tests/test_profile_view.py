"""Profile parameter parsing and keyed reload tests."""

from __future__ import annotations

import asyncio

from promptbook.services.posts_client import PostsErr, PostsErrorKind, PostsOk
from promptbook.services.profile_view import (
    ProfileState,
    ProfileView,
    parse_profile_params,
    parse_user_id,
    welcome_message,
)


class FakePostsClient:
    def __init__(self, result=None) -> None:
        self.calls: list[int] = []
        self._result = result

    async def fetch_posts(self, user_id: int):
        self.calls.append(user_id)
        if self._result is not None:
            return self._result
        return PostsOk([{"id": user_id}])


SESSION = {"id": 5, "name": "Jane Doe"}


def test_parse_profile_params_accepts_positive_integer_id() -> None:
    params = parse_profile_params("42", " Ada ")

    assert params.user_id == 42
    assert params.name == "Ada"
    assert params.raw_id == "42"


def test_parse_profile_params_rejects_malformed_ids() -> None:
    for raw in (None, "", "abc", "-1", "0", "4.2", "1e3", "\u00b2", "\u0663", "\uff11"):
        assert parse_profile_params(raw, None).user_id is None


def test_parse_profile_params_blank_name_is_none() -> None:
    assert parse_profile_params("1", "").name is None
    assert parse_profile_params("1", None).name is None


def test_display_name_prefers_query_then_fallback() -> None:
    assert parse_profile_params("1", "Ada").display_name("John Doe") == "Ada"
    assert parse_profile_params("1", None).display_name("John Doe") == "John Doe"
    assert parse_profile_params("1", None).display_name() == "Anonymous"


def test_welcome_message() -> None:
    assert welcome_message("Ada") == "Welcome to Ada's personalized profile page!"


def test_no_session_means_no_fetch() -> None:
    client = FakePostsClient()
    view = ProfileView()

    state = asyncio.run(view.sync(parse_profile_params("42", "Ada"), None, client))

    assert state is ProfileState.AWAITING_SESSION
    assert client.calls == []
    assert view.posts == []


def test_session_fetches_by_route_id_not_session_id() -> None:
    client = FakePostsClient()
    view = ProfileView()

    state = asyncio.run(view.sync(parse_profile_params("42", None), SESSION, client))

    assert state is ProfileState.LOADED
    assert client.calls == [42]
    assert view.posts == [{"id": 42}]


def test_same_key_does_not_refetch() -> None:
    client = FakePostsClient()
    view = ProfileView()
    params = parse_profile_params("42", "Ada")

    async def scenario() -> None:
        await view.sync(params, SESSION, client)
        await view.sync(params, SESSION, client)
        await view.sync(parse_profile_params("42", "Someone else"), SESSION, client)

    asyncio.run(scenario())

    assert client.calls == [42]


def test_changed_route_id_triggers_exactly_one_refetch() -> None:
    client = FakePostsClient()
    view = ProfileView()

    async def scenario() -> None:
        await view.sync(parse_profile_params("42", None), SESSION, client)
        await view.sync(parse_profile_params("43", None), SESSION, client)
        await view.sync(parse_profile_params("43", None), SESSION, client)

    asyncio.run(scenario())

    assert client.calls == [42, 43]
    assert view.posts == [{"id": 43}]


def test_session_arriving_later_triggers_fetch() -> None:
    client = FakePostsClient()
    view = ProfileView()
    params = parse_profile_params("7", None)

    async def scenario() -> None:
        await view.sync(params, None, client)
        await view.sync(params, SESSION, client)

    asyncio.run(scenario())

    assert client.calls == [7]
    assert view.state is ProfileState.LOADED


def test_invalid_route_never_fetches() -> None:
    client = FakePostsClient()
    view = ProfileView()

    state = asyncio.run(view.sync(parse_profile_params("abc", None), SESSION, client))

    assert state is ProfileState.INVALID_ROUTE
    assert client.calls == []


def test_failed_fetch_exposes_error_and_empty_posts() -> None:
    error = PostsErr(PostsErrorKind.DECODE_FAILED, "Response body is not valid JSON")
    client = FakePostsClient(result=error)
    view = ProfileView()

    state = asyncio.run(view.sync(parse_profile_params("1", None), SESSION, client))

    assert state is ProfileState.FAILED
    assert view.error == error
    assert view.posts == []


def test_parse_user_id_accepts_only_ascii_digits() -> None:
    assert parse_user_id(" 17 ") == 17
    assert parse_user_id("²") is None
    assert parse_user_id("٣") is None
