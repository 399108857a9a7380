"""
Async GraphQL client for the Deep Thoughts API.

Every request carries ``Authorization: Bearer <token>`` from the injected
:class:`~thoughts_client.session.Session` (an empty header when logged
out); the server decides whether the operation needs it.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from . import operations as ops
from .operations import Operation
from .session import Session

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


class GraphQLRequestError(Exception):
    """The server answered with a GraphQL ``errors`` list."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        first = errors[0] if errors else {}
        self.code = (first.get("extensions") or {}).get("code")
        super().__init__(first.get("message", "GraphQL request failed"))


class NormalizedCache:
    """
    Entities seen in responses, keyed by ``(__typename, _id)``.

    Later responses merge into earlier entries field by field, so a partial
    selection never erases fields fetched before.
    """

    def __init__(self):
        self._entities: Dict[Tuple[str, str], Dict[str, Any]] = {}

    def write(self, value: Any) -> None:
        if isinstance(value, list):
            for item in value:
                self.write(item)
        elif isinstance(value, dict):
            for child in value.values():
                self.write(child)
            typename, entity_id = value.get("__typename"), value.get("_id")
            if typename and entity_id is not None:
                self._entities.setdefault((typename, str(entity_id)), {}).update(value)

    def get(self, typename: str, entity_id) -> Optional[Dict[str, Any]]:
        return self._entities.get((typename, str(entity_id)))

    def evict(self, typename: str, entity_id) -> None:
        self._entities.pop((typename, str(entity_id)), None)

    def clear(self) -> None:
        self._entities.clear()

    def __len__(self) -> int:
        return len(self._entities)


class ThoughtsClient:
    """
    Usage::

        session = Session.restore(TokenStore())
        async with ThoughtsClient(session=session) as client:
            await client.login("a@x.com", "secret123")
            thoughts = await client.thoughts()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[Session] = None,
        graphql_path: str = "/graphql",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.session = session if session is not None else Session()
        self.graphql_path = graphql_path
        self.cache = NormalizedCache()
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "ThoughtsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> Dict[str, str]:
        token = self.session.token
        return {"Authorization": f"Bearer {token}" if token else ""}

    async def execute(self, operation: Operation, variables: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one operation and return its top-level result field.

        Raises:
            GraphQLRequestError: the response carried GraphQL errors.
            httpx.HTTPError: transport failure or a non-GraphQL error status.
        """
        response = await self._http.post(
            self.graphql_path,
            json={
                "query": operation.document,
                "operationName": operation.name,
                "variables": variables or {},
            },
            headers=self._headers(),
        )

        payload = None
        if "application/json" in response.headers.get("content-type", ""):
            payload = response.json()
        if payload and payload.get("errors"):
            logger.error(f"{operation.name} failed: {payload['errors'][0].get('message')}")
            raise GraphQLRequestError(payload["errors"])
        response.raise_for_status()

        data = (payload or {}).get("data") or {}
        self.cache.write(data)
        return data.get(operation.result_key)

    # ── Session ────────────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        auth = await self.execute(ops.LOGIN_USER, {"email": email, "password": password})
        self.session.begin(auth["token"])
        return auth

    async def add_user(self, username: str, email: str, password: str) -> Dict[str, Any]:
        auth = await self.execute(
            ops.ADD_USER, {"username": username, "email": email, "password": password}
        )
        self.session.begin(auth["token"])
        return auth

    def logout(self) -> None:
        self.session.end()
        self.cache.clear()

    # ── Queries ────────────────────────────────────────────────────────

    async def thoughts(self, username: Optional[str] = None) -> List[Dict[str, Any]]:
        return await self.execute(ops.QUERY_THOUGHTS, {"username": username})

    async def thought(self, thought_id) -> Optional[Dict[str, Any]]:
        return await self.execute(ops.QUERY_THOUGHT, {"id": str(thought_id)})

    async def me(self) -> Optional[Dict[str, Any]]:
        return await self.execute(ops.QUERY_ME)

    async def users(self) -> List[Dict[str, Any]]:
        return await self.execute(ops.QUERY_USERS)

    async def user(self, username: str) -> Optional[Dict[str, Any]]:
        return await self.execute(ops.QUERY_USER, {"username": username})

    async def is_friend(self, username: str) -> bool:
        return await self.execute(ops.QUERY_IS_FRIEND, {"username": username})

    # ── Mutations ──────────────────────────────────────────────────────

    async def add_thought(self, thought_text: str) -> Dict[str, Any]:
        return await self.execute(ops.ADD_THOUGHT, {"thoughtText": thought_text})

    async def add_reaction(self, thought_id, reaction_body: str) -> Optional[Dict[str, Any]]:
        return await self.execute(
            ops.ADD_REACTION, {"thoughtId": str(thought_id), "reactionBody": reaction_body}
        )

    async def remove_reaction(self, thought_id, reaction_id) -> Optional[Dict[str, Any]]:
        return await self.execute(
            ops.REMOVE_REACTION, {"thoughtId": str(thought_id), "reactionId": str(reaction_id)}
        )

    async def add_friend(self, friend_id) -> Optional[Dict[str, Any]]:
        return await self.execute(ops.ADD_FRIEND, {"id": str(friend_id)})

    async def remove_friend(self, friend_id) -> Optional[Dict[str, Any]]:
        return await self.execute(ops.REMOVE_FRIEND, {"id": str(friend_id)})

    async def remove_thought(self, thought_id) -> Optional[Dict[str, Any]]:
        """
        Delete one of the logged-in user's thoughts.

        Failures are logged and swallowed; the caller just gets None.
        """
        if not self.session.logged_in:
            return None
        try:
            removed = await self.execute(ops.REMOVE_THOUGHT, {"id": str(thought_id)})
        except (GraphQLRequestError, httpx.HTTPError) as exc:
            logger.error(f"Could not remove thought {thought_id}: {exc}")
            return None
        if removed:
            self.cache.evict("Thought", removed["_id"])
        return removed
