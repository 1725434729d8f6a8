"""
Topic model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING

from mdd_api.models.topic_subscription import TopicSubscription

if TYPE_CHECKING:
    from mdd_api.models.user import User
    from mdd_api.models.post import Post


class Topic(SQLModel, table=True):
    """Topic table - named channels users subscribe to and post in."""
    __tablename__ = "topic"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str

    # Relationships
    # Subscribed users; an empty list until someone subscribes, never None
    users: List["User"] = Relationship(back_populates="topics", link_model=TopicSubscription)
    posts: List["Post"] = Relationship(back_populates="topic")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topic):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((Topic, self.id)) if self.id is not None else id(self)
