"""GraphQL Query resolvers."""

import strawberry
from strawberry.types import Info

from blogapi.graphql.context import GraphQLContext
from blogapi.graphql.types import PostType, post_to_type


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(description="List all posts with their author and tags.")
    async def posts(self, info: Info[GraphQLContext, None]) -> list[PostType]:
        items = await info.context.posts.get_posts()
        return [post_to_type(p) for p in items]

    @strawberry.field(description="Get a single post by ID, or null if it does not exist.")
    async def post(
        self,
        info: Info[GraphQLContext, None],
        id: strawberry.ID,
    ) -> PostType | None:
        item = await info.context.posts.get_post(id)
        if not item:
            return None
        return post_to_type(item)
