"""GraphQL context carrying the post query service into resolvers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from blogapi.services.post_service import PostService


class GraphQLContext(BaseContext):
    """Context passed to every GraphQL resolver."""

    def __init__(self, posts: PostService) -> None:
        super().__init__()
        self.posts = posts
