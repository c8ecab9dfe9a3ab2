from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from blogapi.database import Base
from blogapi.models.base import utcnow


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships are only ever populated through explicit eager loading
    posts = relationship("Post", back_populates="author", lazy="raise")

    def __repr__(self) -> str:
        return f"<Author id={self.id} email={self.email!r}>"
