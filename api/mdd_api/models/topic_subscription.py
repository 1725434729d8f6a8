"""
TopicSubscription model - junction table for topic subscriptions.
"""
from sqlmodel import SQLModel, Field
from typing import Optional


class TopicSubscription(SQLModel, table=True):
    """TopicSubscription junction table - one row per (user, topic) membership."""
    __tablename__ = "topic_subscription"

    user_id: Optional[int] = Field(default=None, foreign_key="user.id", primary_key=True)
    topic_id: Optional[int] = Field(default=None, foreign_key="topic.id", primary_key=True)
