"""GraphQL schema and the FastAPI router serving it at /graphql."""

import strawberry
from fastapi import Request
from strawberry.fastapi import GraphQLRouter

from blogapi.graphql.context import GraphQLContext
from blogapi.graphql.extensions import ErrorCodesExtension, OperationMetricsExtension
from blogapi.graphql.queries import Query

schema = strawberry.Schema(
    query=Query,
    extensions=[ErrorCodesExtension, OperationMetricsExtension],
)


async def get_context(request: Request) -> GraphQLContext:
    return GraphQLContext(posts=request.app.state.post_service)


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(schema, context_getter=get_context)
