"""Schema assembly and the FastAPI router that serves it."""

import strawberry
from strawberry.fastapi import GraphQLRouter

from config import settings

from .context import get_context
from .mutations import Mutation
from .queries import Query

schema = strawberry.Schema(query=Query, mutation=Mutation)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        graphql_ide="graphiql" if settings.DEBUG else None,
        context_getter=get_context,
    )
