from pydantic import BaseModel, Field
from typing import List


class PostCreate(BaseModel):
    title: str = Field(..., min_length=1, title="Post Title", description="The title of the post.")
    content: str = Field(..., title="Post Content", description="The body text of the post.")
    published: bool = Field(False, title="Published", description="Whether the post is publicly visible.")
    author_id: int = Field(..., title="Author ID", description="The ID of the author who wrote the post.")
    tag_ids: List[int] = Field(default_factory=list, title="Tag IDs", description="Existing tags to attach.")

    model_config = {
        "json_schema_extra": {
            "example": {
                "title": "First Post",
                "content": "Content of first post",
                "published": True,
                "author_id": 1,
                "tag_ids": [1, 2],
            }
        }
    }
