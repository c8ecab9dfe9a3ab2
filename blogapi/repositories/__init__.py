from .authors import AuthorRepository
from .base import Repository
from .client import DataClient
from .posts import PostRepository
from .tags import TagRepository

__all__ = [
    "AuthorRepository",
    "DataClient",
    "PostRepository",
    "Repository",
    "TagRepository",
]
