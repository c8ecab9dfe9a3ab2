import logging

from blogapi.models.post import Post
from blogapi.repositories.client import DataClient

logger = logging.getLogger(__name__)

POST_RELATIONS = ("author", "tags")

# posts.id is an INTEGER column: int4 on PostgreSQL
MIN_POST_ID = -(2**31)
MAX_POST_ID = 2**31 - 1


class PostService:
    """
    Read operations behind the ``posts`` and ``post`` queries.

    Each call is a single repository read with author and tags eager-loaded.
    Storage errors are not caught here; they reach the transport layer as
    raised by the repositories.
    """

    def __init__(self, client: DataClient) -> None:
        self.client = client

    async def get_posts(self) -> list[Post]:
        posts = await self.client.posts.find_many(include=POST_RELATIONS)
        logger.debug(f"Fetched {len(posts)} posts")
        return posts

    async def get_post(self, post_id: int | str) -> Post | None:
        """
        Return the post or ``None``.

        Ids that are not integers, or that no ``posts.id`` value can hold,
        match nothing and are answered without a query.
        """
        try:
            post_id = int(post_id)
        except (TypeError, ValueError):
            logger.debug(f"Post id {post_id!r} is not an integer, treating as not found")
            return None
        if not MIN_POST_ID <= post_id <= MAX_POST_ID:
            logger.debug(f"Post id {post_id} is out of range, treating as not found")
            return None
        return await self.client.posts.find_unique(where={"id": post_id}, include=POST_RELATIONS)
