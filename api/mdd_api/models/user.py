"""
User model.
"""
from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, timezone
import hashlib

from mdd_api.models.topic_subscription import TopicSubscription

if TYPE_CHECKING:
    from mdd_api.models.topic import Topic
    from mdd_api.models.post import Post
    from mdd_api.models.comment import Comment


class User(SQLModel, table=True):
    """User table - stores user information."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)  # Unique username
    email: str = Field(unique=True, index=True)  # Unique email address
    password: str  # Hashed password
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    posts: List["Post"] = Relationship(back_populates="author")
    comments: List["Comment"] = Relationship(back_populates="author")
    topics: List["Topic"] = Relationship(back_populates="users", link_model=TopicSubscription)

    def __eq__(self, other: object) -> bool:
        # Persisted users are the same user when their ids match
        if not isinstance(other, User):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((User, self.id)) if self.id is not None else id(self)

    @staticmethod
    def hash_password(password: str) -> str:
        """Simple password hashing using SHA256."""
        return hashlib.sha256(password.encode()).hexdigest()

    def verify_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""
        return self.password == self.hash_password(password)
