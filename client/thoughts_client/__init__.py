"""
Python client for the Deep Thoughts GraphQL API.

Provides:
- Operation documents for every query and mutation
- An explicit, optionally persisted login session
- An async client that attaches the session token to every request
- Client-side pagination helpers
"""

from .api import GraphQLRequestError, NormalizedCache, ThoughtsClient
from .pagination import THOUGHTS_PER_PAGE, Paginator, page_count, paginate
from .session import Session, TokenStore

__all__ = [
    "GraphQLRequestError",
    "NormalizedCache",
    "ThoughtsClient",
    "THOUGHTS_PER_PAGE",
    "Paginator",
    "page_count",
    "paginate",
    "Session",
    "TokenStore",
]
