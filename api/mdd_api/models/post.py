"""
Post model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone

if TYPE_CHECKING:
    from mdd_api.models.user import User
    from mdd_api.models.topic import Topic
    from mdd_api.models.comment import Comment


class Post(SQLModel, table=True):
    """Post table - an article filed under a topic."""
    __tablename__ = "post"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    content: str
    author_id: Optional[int] = Field(default=None, foreign_key="user.id")
    topic_id: Optional[int] = Field(default=None, foreign_key="topic.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    author: Optional["User"] = Relationship(back_populates="posts")
    topic: Optional["Topic"] = Relationship(back_populates="posts")
    comments: List["Comment"] = Relationship(back_populates="post")
