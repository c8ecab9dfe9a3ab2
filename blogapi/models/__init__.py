from .author import Author
from .post import Post
from .post_tags import post_tags
from .tag import Tag

__all__ = [
    "Author",
    "Post",
    "post_tags",
    "Tag",
]
