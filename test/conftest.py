"""
Pytest configuration and fixtures for the Blog API tests
"""

import os
import sys
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.engine import make_url

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from blogapi.config import settings  # noqa: E402
from blogapi.database import Database  # noqa: E402
from blogapi.models import Author, Post, Tag  # noqa: E402
from blogapi.repositories.client import DataClient  # noqa: E402
from blogapi.schemas import AuthorCreate, PostCreate, TagCreate  # noqa: E402
from blogapi.services.post_service import PostService  # noqa: E402
from blogapi.utils.query_counter import QueryCounter  # noqa: E402
from main import create_app  # noqa: E402


def derive_test_database_url(database_url: str) -> str:
    """Point ``database_url`` at a sibling database named ``<name>_test``."""
    url = make_url(database_url)
    db_name = url.database or "blog"
    return url.set(database=f"{db_name}_test").render_as_string(hide_password=False)


def get_test_database_url() -> str:
    """
    Get the test database URL.

    TEST_DATABASE_URL wins; USE_DATABASE_URL_FOR_TESTS=1 derives an isolated
    ``_test`` database from DATABASE_URL; otherwise SQLite in memory.
    """
    test_url = os.getenv("TEST_DATABASE_URL")
    if test_url:
        return test_url
    if os.getenv("USE_DATABASE_URL_FOR_TESTS") == "1":
        return derive_test_database_url(settings.database_url)
    return "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()


@pytest.fixture
def query_counter() -> QueryCounter:
    return QueryCounter()


@pytest.fixture
async def database(query_counter: QueryCounter) -> AsyncGenerator[Database, None]:
    """Fresh schema per test, with the query counter wired in."""
    db = Database(TEST_DATABASE_URL, query_counter=query_counter)
    await db.drop_all()
    await db.create_all()

    yield db

    await db.drop_all()
    await db.dispose()


@pytest.fixture
def client(database: Database) -> DataClient:
    return DataClient(database)


@pytest.fixture
def post_service(client: DataClient) -> PostService:
    return PostService(client)


@pytest.fixture
def app(database: Database):
    """FastAPI app bound to the per-test database."""
    return create_app(database)


@pytest.fixture
async def http_client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def john(client: DataClient) -> Author:
    return await client.authors.create(AuthorCreate(name="John Doe", email="john@example.com", bio="A writer"))


@pytest.fixture
async def jane(client: DataClient) -> Author:
    return await client.authors.create(AuthorCreate(name="Jane Smith", email="jane@example.com"))


@pytest.fixture
async def technology(client: DataClient) -> Tag:
    return await client.tags.create(TagCreate(name="Technology"))


@pytest.fixture
async def programming(client: DataClient) -> Tag:
    return await client.tags.create(TagCreate(name="Programming"))


@pytest.fixture
async def first_post(client: DataClient, john: Author, technology: Tag, programming: Tag) -> Post:
    return await client.posts.create(
        PostCreate(
            title="First Post",
            content="Content of first post",
            published=True,
            author_id=john.id,
            tag_ids=[technology.id, programming.id],
        )
    )
