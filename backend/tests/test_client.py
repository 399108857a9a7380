"""
Tests for the Python API client: session handling, header attachment,
error surfacing and the normalized cache.
"""

import json
from datetime import timedelta
from types import SimpleNamespace

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from auth.jwt_service import create_access_token
from main import app
from thoughts_client import (
    GraphQLRequestError,
    NormalizedCache,
    Paginator,
    Session,
    ThoughtsClient,
    TokenStore,
)
from thoughts_client.session import TOKEN_KEY


ANA = SimpleNamespace(id=1, username="ana", email="a@x.com")


@pytest_asyncio.fixture
async def client(async_client, tmp_path):
    """ThoughtsClient wired to the in-process app (``async_client`` sets up the test DB)."""
    session = Session.restore(TokenStore(tmp_path / "session.json"))
    async with ThoughtsClient(
        base_url="http://test",
        session=session,
        transport=ASGITransport(app=app),
    ) as c:
        yield c


def _mock_client(handler, session=None):
    return ThoughtsClient(
        base_url="http://test",
        session=session,
        transport=httpx.MockTransport(handler),
    )


class TestSession:
    def test_empty_session_is_logged_out(self):
        assert not Session().logged_in

    def test_begin_persists_token(self, tmp_path):
        store = TokenStore(tmp_path / "session.json")
        session = Session(store=store)
        token = create_access_token(ANA)

        session.begin(token)

        assert session.logged_in
        assert session.username == "ana"
        assert json.loads((tmp_path / "session.json").read_text()) == {TOKEN_KEY: token}
        assert Session.restore(store).token == token

    def test_end_clears_store(self, tmp_path):
        store = TokenStore(tmp_path / "session.json")
        session = Session(store=store)
        session.begin(create_access_token(ANA))

        session.end()

        assert not session.logged_in
        assert store.load() is None

    def test_expired_token_ends_session(self, tmp_path):
        store = TokenStore(tmp_path / "session.json")
        store.save(create_access_token(ANA, expires_delta=timedelta(seconds=-1)))
        session = Session.restore(store)

        assert session.token is not None
        assert not session.logged_in
        assert session.token is None
        assert store.load() is None

    def test_garbage_token_is_logged_out(self):
        assert not Session(token="garbage").logged_in

    def test_unreadable_store_is_empty(self, tmp_path):
        path = tmp_path / "session.json"
        path.write_text("{not json")
        assert TokenStore(path).load() is None


class TestRequestHeaders:
    @pytest.mark.asyncio
    async def test_header_sent_when_logged_out(self):
        seen = []

        def handler(request):
            seen.append(request.headers.get("authorization"))
            return httpx.Response(200, json={"data": {"thoughts": []}})

        async with _mock_client(handler) as c:
            assert await c.thoughts() == []

        assert seen == [""]

    @pytest.mark.asyncio
    async def test_bearer_token_attached(self):
        seen = []
        token = create_access_token(ANA)

        def handler(request):
            seen.append(request.headers.get("authorization"))
            body = json.loads(request.content)
            assert body["operationName"] == "thoughts"
            assert body["variables"] == {"username": "ana"}
            return httpx.Response(200, json={"data": {"thoughts": []}})

        async with _mock_client(handler, session=Session(token=token)) as c:
            await c.thoughts("ana")

        assert seen == [f"Bearer {token}"]

    @pytest.mark.asyncio
    async def test_graphql_errors_raise(self):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "data": None,
                    "errors": [{"message": "You need to be logged in!", "extensions": {"code": "UNAUTHENTICATED"}}],
                },
            )

        async with _mock_client(handler) as c:
            with pytest.raises(GraphQLRequestError) as exc_info:
                await c.add_thought("hi")

        assert exc_info.value.code == "UNAUTHENTICATED"
        assert str(exc_info.value) == "You need to be logged in!"

    @pytest.mark.asyncio
    async def test_http_error_status_raises(self):
        def handler(request):
            return httpx.Response(502, text="bad gateway")

        async with _mock_client(handler) as c:
            with pytest.raises(httpx.HTTPStatusError):
                await c.users()

    @pytest.mark.asyncio
    async def test_remove_thought_swallows_errors(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"data": None, "errors": [{"message": "boom"}]},
            )

        session = Session(token=create_access_token(ANA))
        async with _mock_client(handler, session=session) as c:
            assert await c.remove_thought(5) is None

    @pytest.mark.asyncio
    async def test_remove_thought_skipped_when_logged_out(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"data": {"removeThought": None}})

        async with _mock_client(handler) as c:
            assert await c.remove_thought(5) is None

        assert calls == []


class TestNormalizedCache:
    def test_merges_entities_by_type_and_id(self):
        cache = NormalizedCache()
        cache.write({"thought": {"__typename": "Thought", "_id": "1", "thoughtText": "hi"}})
        cache.write({"thoughts": [{"__typename": "Thought", "_id": "1", "reactionCount": 2}]})

        assert cache.get("Thought", 1) == {
            "__typename": "Thought",
            "_id": "1",
            "thoughtText": "hi",
            "reactionCount": 2,
        }

    def test_nested_entities_and_type_separation(self):
        cache = NormalizedCache()
        cache.write({
            "me": {
                "__typename": "User",
                "_id": "1",
                "friends": [{"__typename": "User", "_id": "2", "username": "bob"}],
                "thoughts": [{"__typename": "Thought", "_id": "1", "thoughtText": "hi"}],
            }
        })

        assert len(cache) == 3
        assert cache.get("User", "2")["username"] == "bob"
        assert cache.get("Thought", "1")["thoughtText"] == "hi"

    def test_evict_and_clear(self):
        cache = NormalizedCache()
        cache.write({"__typename": "Thought", "_id": "1"})
        cache.evict("Thought", "1")
        assert cache.get("Thought", "1") is None

        cache.write({"__typename": "Thought", "_id": "2"})
        cache.clear()
        assert len(cache) == 0


class TestClientAgainstServer:
    @pytest.mark.asyncio
    async def test_signup_post_and_read(self, client):
        auth = await client.add_user("ana", "a@x.com", "secret123")
        assert auth["user"]["username"] == "ana"
        assert client.session.logged_in

        thought = await client.add_thought("hi")
        assert thought["username"] == "ana"
        assert thought["reactionCount"] == 0

        thoughts = await client.thoughts()
        assert [t["_id"] for t in thoughts] == [thought["_id"]]
        assert client.cache.get("Thought", thought["_id"])["thoughtText"] == "hi"

    @pytest.mark.asyncio
    async def test_login_logout_cycle(self, client):
        signup = await client.add_user("ana", "a@x.com", "secret123")
        client.logout()
        assert not client.session.logged_in
        assert client.session.store.load() is None

        with pytest.raises(GraphQLRequestError) as exc_info:
            await client.add_thought("hi")
        assert exc_info.value.code == "UNAUTHENTICATED"

        auth = await client.login("a@x.com", "secret123")
        assert auth["user"]["_id"] == signup["user"]["_id"]
        assert (await client.me())["username"] == "ana"

    @pytest.mark.asyncio
    async def test_wrong_password(self, client):
        await client.add_user("ana", "a@x.com", "secret123")
        client.logout()

        with pytest.raises(GraphQLRequestError) as exc_info:
            await client.login("a@x.com", "wrong-password")
        assert exc_info.value.code == "UNAUTHENTICATED"
        assert not client.session.logged_in

    @pytest.mark.asyncio
    async def test_friends_reactions_and_removal(self, client):
        bob = await client.add_user("bob", "b@x.com", "secret123")
        client.logout()
        await client.add_user("ana", "a@x.com", "secret123")

        me = await client.add_friend(bob["user"]["_id"])
        assert me["friendCount"] == 1
        assert await client.is_friend("bob") is True
        me = await client.remove_friend(bob["user"]["_id"])
        assert me["friendCount"] == 0

        thought = await client.add_thought("hi")
        updated = await client.add_reaction(thought["_id"], "first!")
        assert updated["reactionCount"] == 1
        reaction_id = updated["reactions"][0]["_id"]
        updated = await client.remove_reaction(thought["_id"], reaction_id)
        assert updated["reactionCount"] == 0

        removed = await client.remove_thought(thought["_id"])
        assert removed["_id"] == thought["_id"]
        assert client.cache.get("Thought", thought["_id"]) is None
        assert await client.thought(thought["_id"]) is None

    @pytest.mark.asyncio
    async def test_paginate_fetched_thoughts(self, client):
        await client.add_user("ana", "a@x.com", "secret123")
        for i in range(25):
            await client.add_thought(f"thought {i}")

        pager = Paginator(await client.thoughts())
        assert pager.pages == 3
        assert pager.current[0]["thoughtText"] == "thought 24"
        pager.go_to(3)
        assert [t["thoughtText"] for t in pager.current] == [f"thought {i}" for i in range(4, -1, -1)]
