from blogapi.models.tag import Tag
from blogapi.repositories.base import Repository
from blogapi.schemas.tag import TagCreate


class TagRepository(Repository[Tag]):
    model = Tag
    create_schema = TagCreate
    unique_fields = frozenset({"id", "name"})
