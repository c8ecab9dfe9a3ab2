from pydantic import BaseModel, Field


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, title="Tag Name", description="Unique name of the tag.")
