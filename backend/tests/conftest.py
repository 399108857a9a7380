"""
Pytest configuration and fixtures for Deep Thoughts API tests.

Provides:
- Async SQLite in-memory database setup
- FastAPI app with dependency overrides
- AsyncClient for testing the GraphQL endpoint
- ``gql`` / ``signup`` helpers for issuing operations
"""

from typing import Any, Dict, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app


SIGNUP = """
mutation addUser($username: String!, $email: String!, $password: String!) {
  addUser(username: $username, email: $email, password: $password) {
    token
    user { _id username email }
  }
}
"""


@pytest_asyncio.fixture
async def async_client():
    """
    Create an AsyncClient pointing to the FastAPI app with an in-memory
    test database. The database is created fresh for each test and cleaned
    up after the test completes.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        future=True,
        poolclass=StaticPool,
    )

    async_session = sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        future=True,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async def override_get_db():
        async with async_session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.fixture
def gql(async_client: AsyncClient):
    """
    Post a GraphQL operation and return the decoded JSON body.

    Usage::

        body = await gql("{ thoughts { _id } }", token=token)
    """

    async def _run(
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = await async_client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _run


@pytest.fixture
def signup(gql):
    """Register a user and return ``(token, user)``."""

    async def _signup(username: str, email: Optional[str] = None, password: str = "secret123"):
        body = await gql(
            SIGNUP,
            {"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert "errors" not in body, body
        auth = body["data"]["addUser"]
        return auth["token"], auth["user"]

    return _signup


def error_code(body: Dict[str, Any]) -> Optional[str]:
    """``extensions.code`` of the first GraphQL error, if any."""
    errors = body.get("errors") or []
    if not errors:
        return None
    return (errors[0].get("extensions") or {}).get("code")
