"""
Tests for the post query service

The query count of ``get_posts`` must stay flat however many posts,
authors and tags exist. Error propagation is checked with a mocked
data client.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from blogapi.exceptions import ConstraintViolationError, DatabaseConnectionError
from blogapi.schemas import AuthorCreate, PostCreate, TagCreate
from blogapi.services.post_service import POST_RELATIONS, PostService

# one base query plus one per eager-loaded relation
EXPECTED_QUERY_COUNT = 1 + len(POST_RELATIONS)


async def create_posts(client, count: int, authors: int = 3, tags: int = 4) -> None:
    author_ids = [
        (await client.authors.create(AuthorCreate(name=f"Author {i}", email=f"author{i}@example.com"))).id
        for i in range(authors)
    ]
    tag_ids = [(await client.tags.create(TagCreate(name=f"Tag {i}"))).id for i in range(tags)]
    for i in range(count):
        await client.posts.create(
            PostCreate(
                title=f"Post {i}",
                content="...",
                published=i % 2 == 0,
                author_id=author_ids[i % len(author_ids)],
                tag_ids=tag_ids[: i % (len(tag_ids) + 1)],
            )
        )


async def count_get_posts_queries(post_service, query_counter) -> tuple[int, list]:
    query_counter.start()
    posts = await post_service.get_posts()
    query_counter.stop()
    return query_counter.count, posts


class TestGetPostsQueryCount:
    @pytest.mark.parametrize("n", [1, 2, 5, 25])
    async def test_query_count_constant_in_post_count(self, client, post_service, query_counter, n):
        await create_posts(client, n)

        count, posts = await count_get_posts_queries(post_service, query_counter)

        assert len(posts) == n
        assert count == EXPECTED_QUERY_COUNT

    async def test_query_count_constant_beyond_loader_chunk_size(self, client, post_service, query_counter):
        await create_posts(client, 520, authors=7, tags=3)

        count, posts = await count_get_posts_queries(post_service, query_counter)

        assert len(posts) == 520
        assert count == EXPECTED_QUERY_COUNT

    async def test_empty_table_issues_only_base_query(self, post_service, query_counter):
        count, posts = await count_get_posts_queries(post_service, query_counter)

        assert posts == []
        # the relation loaders only run when the base query returns rows
        assert count == 1

    async def test_every_post_fully_populated(self, client, post_service):
        await create_posts(client, 10)

        posts = await post_service.get_posts()

        for post in posts:
            assert post.author.id == post.author_id
            assert post.author.email.endswith("@example.com")
            assert isinstance(post.tags, list)


class TestGetPost:
    async def test_returns_post_with_author_and_tags(self, post_service, first_post, query_counter):
        query_counter.start()
        post = await post_service.get_post(first_post.id)
        query_counter.stop()

        assert post.id == first_post.id
        assert post.author.name == "John Doe"
        assert sorted(t.name for t in post.tags) == ["Programming", "Technology"]
        assert query_counter.count == EXPECTED_QUERY_COUNT

    async def test_accepts_string_id(self, post_service, first_post):
        post = await post_service.get_post(str(first_post.id))
        assert post.id == first_post.id

    async def test_post_without_tags_has_empty_list(self, client, post_service, jane):
        created = await client.posts.create(PostCreate(title="Lonely", content="...", author_id=jane.id))
        post = await post_service.get_post(created.id)
        assert post.tags == []
        assert post.author.name == "Jane Smith"

    async def test_missing_post_returns_none(self, post_service):
        assert await post_service.get_post(9999) is None

    @pytest.mark.parametrize("bad_id", ["abc", "", "1.5", None])
    async def test_non_integer_id_returns_none(self, post_service, bad_id):
        assert await post_service.get_post(bad_id) is None

    @pytest.mark.parametrize("big_id", [2**31, -(2**31) - 1, 2**63, str(2**63)])
    async def test_id_beyond_column_range_returns_none(self, post_service, query_counter, big_id):
        query_counter.start()
        post = await post_service.get_post(big_id)
        query_counter.stop()

        assert post is None
        assert query_counter.count == 0

    async def test_largest_column_id_is_queried(self, post_service, query_counter):
        query_counter.start()
        post = await post_service.get_post(2**31 - 1)
        query_counter.stop()

        assert post is None
        assert query_counter.count == 1


class TestPostServiceWithMockedClient:
    @pytest.fixture
    def mock_client(self):
        client = MagicMock()
        client.posts.find_many = AsyncMock(return_value=[])
        client.posts.find_unique = AsyncMock(return_value=None)
        return client

    async def test_get_posts_single_call_with_includes(self, mock_client):
        service = PostService(mock_client)

        assert await service.get_posts() == []
        mock_client.posts.find_many.assert_awaited_once_with(include=("author", "tags"))

    async def test_get_post_single_call_with_includes(self, mock_client):
        service = PostService(mock_client)

        assert await service.get_post("7") is None
        mock_client.posts.find_unique.assert_awaited_once_with(where={"id": 7}, include=("author", "tags"))

    async def test_connection_error_propagates(self, mock_client):
        mock_client.posts.find_many.side_effect = DatabaseConnectionError("connection refused")
        service = PostService(mock_client)

        with pytest.raises(DatabaseConnectionError, match="connection refused"):
            await service.get_posts()

    async def test_constraint_violation_propagates(self, mock_client):
        mock_client.posts.find_unique.side_effect = ConstraintViolationError("boom")
        service = PostService(mock_client)

        with pytest.raises(ConstraintViolationError):
            await service.get_post(1)
