from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.exceptions import ConstraintViolationError
from blogapi.models.post import Post
from blogapi.models.tag import Tag
from blogapi.repositories.base import Repository
from blogapi.schemas.post import PostCreate


class PostRepository(Repository[Post]):
    model = Post
    create_schema = PostCreate

    async def build(self, session: AsyncSession, data: PostCreate) -> Post:
        """Create the post and connect the requested tags (author is checked by the FK)."""
        post = Post(**data.model_dump(exclude={"tag_ids"}))

        tag_ids = list(dict.fromkeys(data.tag_ids))
        tags = []
        if tag_ids:
            result = await session.execute(select(Tag).where(Tag.id.in_(tag_ids)))
            tags = list(result.scalars().all())
            missing = set(tag_ids) - {tag.id for tag in tags}
            if missing:
                raise ConstraintViolationError(
                    f"Cannot connect unknown tag id(s): {', '.join(str(i) for i in sorted(missing))}",
                    constraint="post_tags_tag_id_fkey",
                )
        post.tags = tags
        return post
