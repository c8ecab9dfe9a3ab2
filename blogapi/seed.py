"""
Sample data for local development.

Run with ``blog-seed`` (or ``python -m blogapi.seed``). Existing rows are
wiped first, posts before authors and tags so foreign keys stay satisfied.
"""

import asyncio
import logging

from blogapi.config import settings
from blogapi.database import Database
from blogapi.repositories.client import DataClient
from blogapi.schemas import AuthorCreate, PostCreate, TagCreate

logger = logging.getLogger(__name__)

TAGS = ["Technology", "Programming", "Web Development"]

AUTHORS = [
    AuthorCreate(
        name="John Doe",
        email="john@example.com",
        bio="A passionate software developer and tech enthusiast.",
    ),
    AuthorCreate(
        name="Jane Smith",
        email="jane@example.com",
        bio="Full-stack developer who loves building web applications.",
    ),
]

# (title, content, published, author email, tag names)
POSTS = [
    (
        "Getting Started with GraphQL",
        "GraphQL is a query language for APIs and a runtime for fulfilling those queries with your "
        "existing data. It provides a complete and understandable description of the data in your API...",
        True,
        "john@example.com",
        ["Technology", "Programming"],
    ),
    (
        "Building Modern Web Applications with FastAPI",
        "FastAPI is a modern, fast web framework for building APIs with Python based on standard "
        "type hints. It is built on Starlette and Pydantic...",
        True,
        "jane@example.com",
        ["Web Development", "Programming", "Technology"],
    ),
    (
        "Introduction to SQLAlchemy",
        "SQLAlchemy is the Python SQL toolkit and Object Relational Mapper that gives application "
        "developers the full power and flexibility of SQL...",
        True,
        "john@example.com",
        ["Programming", "Technology"],
    ),
    (
        "Draft: Upcoming Features in Python",
        "This post discusses the upcoming features in the next version of Python...",
        False,
        "jane@example.com",
        ["Programming"],
    ),
]


async def seed(client: DataClient) -> dict[str, int]:
    """Replace all blog data with the sample set and return row counts."""
    await client.posts.delete_many()
    await client.authors.delete_many()
    await client.tags.delete_many()

    tags = {}
    for name in TAGS:
        tag = await client.tags.create(TagCreate(name=name))
        tags[name] = tag.id

    authors = {}
    for data in AUTHORS:
        author = await client.authors.create(data)
        authors[author.email] = author.id

    for title, content, published, email, tag_names in POSTS:
        await client.posts.create(
            PostCreate(
                title=title,
                content=content,
                published=published,
                author_id=authors[email],
                tag_ids=[tags[name] for name in tag_names],
            )
        )

    counts = {"tags": len(tags), "authors": len(authors), "posts": len(POSTS)}
    logger.info(f"Database seeded successfully: {counts}")
    return counts


async def _main() -> None:
    database = Database(settings.database_url, environment=settings.environment)
    try:
        await database.create_all()
        await seed(DataClient(database))
    finally:
        await database.dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    asyncio.run(_main())


if __name__ == "__main__":
    main()
