from .author import AuthorCreate
from .post import PostCreate
from .tag import TagCreate

# Define the public API of this module
__all__ = [
    "AuthorCreate",
    "PostCreate",
    "TagCreate",
]
