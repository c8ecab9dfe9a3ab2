from blogapi.models.author import Author
from blogapi.repositories.base import Repository
from blogapi.schemas.author import AuthorCreate


class AuthorRepository(Repository[Author]):
    model = Author
    create_schema = AuthorCreate
    unique_fields = frozenset({"id", "email"})
