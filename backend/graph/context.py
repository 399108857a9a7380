"""
Per-request GraphQL context.

Built once per request by :func:`get_context`: the request's database
session and its resolved :data:`~auth.identity.Identity`. Resolvers reach
the database only through :meth:`GraphQLContext.session`, which serialises
access because sibling fields may resolve concurrently while an
``AsyncSession`` must not be used concurrently.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import BaseContext

from auth.dependencies import get_identity
from auth.identity import Authenticated, Identity, NotAuthenticated, require_authenticated
from database import get_db

from .errors import AuthenticationError


class GraphQLContext(BaseContext):
    def __init__(self, db: AsyncSession, identity: Identity):
        super().__init__()
        self.db = db
        self.identity = identity
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._lock:
            yield self.db

    def require_user(self) -> Authenticated:
        """Return the authenticated identity or raise ``AuthenticationError``."""
        try:
            return require_authenticated(self.identity)
        except NotAuthenticated:
            raise AuthenticationError()


async def get_context(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> GraphQLContext:
    return GraphQLContext(db=db, identity=identity)
