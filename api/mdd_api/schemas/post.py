"""
Post schemas.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from mdd_api.models.post import Post


class PostDisplayResponse(BaseModel):
    """A post as shown in a feed: author and topic by name, not by record."""
    id: int
    title: str
    content: str
    created_at: datetime
    author_name: Optional[str] = None
    topic_name: Optional[str] = None

    @classmethod
    def from_post(cls, post: Post) -> "PostDisplayResponse":
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            created_at=post.created_at,
            author_name=post.author.username if post.author else None,
            topic_name=post.topic.name if post.topic else None,
        )


class PostsDisplayResponse(BaseModel):
    """Response schema for a list of posts."""
    posts: List[PostDisplayResponse]
