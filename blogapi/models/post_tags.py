from sqlalchemy import Table, Column, Integer, ForeignKey
from blogapi.database import Base

# Composite primary key keeps each post/tag pair unique. Rows go away with
# either side of the association, never the other way round.
post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True),
)
