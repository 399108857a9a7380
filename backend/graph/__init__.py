"""
GraphQL API for Deep Thoughts.

One endpoint, one schema: the root ``Query`` and ``Mutation`` types resolve
against ``services`` using the per-request ``GraphQLContext``.
"""

from .schema import create_graphql_router, schema

__all__ = ["create_graphql_router", "schema"]
