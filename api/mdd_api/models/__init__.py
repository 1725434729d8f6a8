"""
Models package - imports all models so their tables and relationships are registered.
"""
from mdd_api.models.topic_subscription import TopicSubscription
from mdd_api.models.user import User
from mdd_api.models.topic import Topic
from mdd_api.models.post import Post
from mdd_api.models.comment import Comment

__all__ = [
    'TopicSubscription',
    'User',
    'Topic',
    'Post',
    'Comment',
]
