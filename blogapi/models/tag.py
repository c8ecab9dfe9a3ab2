from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from blogapi.database import Base
from blogapi.models.post_tags import post_tags


class Tag(Base):
    __tablename__ = "tags"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)

    posts = relationship(
        "Post", secondary=post_tags, back_populates="tags", lazy="raise", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Tag id={self.id} name={self.name!r}>"
