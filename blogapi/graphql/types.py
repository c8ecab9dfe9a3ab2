"""Strawberry GraphQL types mapped from the blog SQLAlchemy models."""

from datetime import datetime
from typing import List, Optional

import strawberry
from sqlalchemy import inspect


@strawberry.type(name="Tag")
class TagType:
    """A post tag."""

    id: int
    name: str


@strawberry.type(name="Author")
class AuthorType:
    """A blog author. ``posts`` is null unless the author was loaded with them."""

    id: int
    name: str
    email: str
    bio: Optional[str]
    created_at: datetime
    updated_at: datetime
    posts: Optional[List["PostType"]] = None


@strawberry.type(name="Post")
class PostType:
    """A blog post with its author and tags."""

    id: int
    title: str
    content: str
    published: bool
    author_id: int
    author: AuthorType
    tags: Optional[List[TagType]]
    created_at: datetime
    updated_at: datetime


# ============================================================================
# Helper conversion functions
# ============================================================================


def is_loaded(instance, relation: str) -> bool:
    """True when ``relation`` was eager-loaded on the ORM instance."""
    return relation not in inspect(instance).unloaded


def tag_to_type(tag) -> TagType:
    return TagType(id=tag.id, name=tag.name)


def author_to_type(author) -> AuthorType:
    author_type = AuthorType(
        id=author.id,
        name=author.name,
        email=author.email,
        bio=author.bio,
        created_at=author.created_at,
        updated_at=author.updated_at,
    )
    if is_loaded(author, "posts"):
        author_type.posts = [post_to_type(p, author=author_type) for p in author.posts]
    return author_type


def post_to_type(post, author: AuthorType | None = None) -> PostType:
    return PostType(
        id=post.id,
        title=post.title,
        content=post.content,
        published=post.published,
        author_id=post.author_id,
        author=author or author_to_type(post.author),
        tags=[tag_to_type(t) for t in post.tags] if is_loaded(post, "tags") else None,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )
