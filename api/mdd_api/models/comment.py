"""
Comment model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING
from datetime import datetime, timezone

if TYPE_CHECKING:
    from mdd_api.models.user import User
    from mdd_api.models.post import Post


class Comment(SQLModel, table=True):
    """Comment table - a reply to a post."""
    __tablename__ = "comment"

    id: Optional[int] = Field(default=None, primary_key=True)
    content: str
    author_id: Optional[int] = Field(default=None, foreign_key="user.id")
    post_id: Optional[int] = Field(default=None, foreign_key="post.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    author: Optional["User"] = Relationship(back_populates="comments")
    post: Optional["Post"] = Relationship(back_populates="comments")
