from blogapi.database import Database
from blogapi.repositories.authors import AuthorRepository
from blogapi.repositories.posts import PostRepository
from blogapi.repositories.tags import TagRepository


class DataClient:
    """Typed access to every entity, all sharing one :class:`Database`."""

    def __init__(self, database: Database) -> None:
        self.database = database
        self.authors = AuthorRepository(database)
        self.tags = TagRepository(database)
        self.posts = PostRepository(database)
