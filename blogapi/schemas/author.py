from pydantic import BaseModel, Field
from typing import Optional


class AuthorCreate(BaseModel):
    name: str = Field(..., min_length=1, title="Author Name", description="Display name of the author.")
    email: str = Field(..., min_length=3, title="Email", description="Unique contact address of the author.")
    bio: Optional[str] = Field(None, title="Biography", description="A short biography.")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "John Doe",
                "email": "john@example.com",
                "bio": "A writer",
            }
        }
    }
