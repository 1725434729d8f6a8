"""
Topics endpoint.
"""
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from mdd_api.api.v1.endpoints.utils import get_current_user
from mdd_api.core.database import get_session
from mdd_api.models.topic import Topic
from mdd_api.models.user import User
from mdd_api.schemas.auth import MessageResponse
from mdd_api.schemas.post import PostDisplayResponse, PostsDisplayResponse
from mdd_api.schemas.topic import (
    TopicResponse,
    CreateTopicRequest,
    UpdateTopicRequest,
    TopicsResponse
)
from mdd_api.services import subscription_service, topic_service

router = APIRouter(prefix="/topics", tags=["topics"])


def _topics_response(topics) -> TopicsResponse:
    # Sets come back unordered; sort so clients get a stable listing
    ordered = sorted(topics, key=lambda topic: topic.id)
    return TopicsResponse(topics=[TopicResponse.model_validate(topic) for topic in ordered])


@router.get("", response_model=TopicsResponse)
async def get_topics(session: Session = Depends(get_session)):
    """Get all topics."""
    return _topics_response(topic_service.find_all_topics(session).unwrap())


@router.get("/subscriptions", response_model=TopicsResponse)
async def get_my_subscriptions(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Get the topics the current user is subscribed to."""
    return _topics_response(subscription_service.my_subscriptions(session, current_user).unwrap())


@router.get("/{topic_id}", response_model=TopicResponse)
async def get_topic(topic_id: int, session: Session = Depends(get_session)):
    """Get a topic by ID."""
    return TopicResponse.model_validate(topic_service.find_topic_by_id(session, topic_id).unwrap())


@router.get("/{topic_id}/posts", response_model=PostsDisplayResponse)
async def get_topic_posts(topic_id: int, session: Session = Depends(get_session)):
    """Get the posts filed under a topic, most recent first."""
    topic = topic_service.find_topic_by_id(session, topic_id).unwrap()
    posts = sorted(topic.posts, key=lambda post: post.created_at, reverse=True)
    return PostsDisplayResponse(posts=[PostDisplayResponse.from_post(post) for post in posts])


@router.post("", response_model=TopicResponse, status_code=status.HTTP_201_CREATED)
async def create_topic(
    request: CreateTopicRequest,
    session: Session = Depends(get_session)
):
    """Create a new topic."""
    topic = topic_service.create_topic(session, Topic(name=request.name.strip())).unwrap()
    return TopicResponse.model_validate(topic)


@router.put("/{topic_id}", response_model=TopicResponse)
async def update_topic(
    topic_id: int,
    request: UpdateTopicRequest,
    session: Session = Depends(get_session)
):
    """Rename a topic by ID."""
    topic = topic_service.update_topic(session, Topic(id=topic_id, name=request.name.strip())).unwrap()
    return TopicResponse.model_validate(topic)


@router.delete("/{topic_id}", response_model=MessageResponse)
async def delete_topic(topic_id: int, session: Session = Depends(get_session)):
    """Delete a topic by ID."""
    return MessageResponse(message=topic_service.delete_topic(session, topic_id).unwrap())


@router.post("/{topic_id}/subscription", response_model=MessageResponse)
def subscribe(
    topic_id: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Subscribe the current user to a topic."""
    return MessageResponse(message=subscription_service.subscribe(session, topic_id, current_user).unwrap())


@router.delete("/{topic_id}/subscription", response_model=MessageResponse)
def unsubscribe(
    topic_id: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Unsubscribe the current user from a topic."""
    return MessageResponse(message=subscription_service.unsubscribe(session, topic_id, current_user).unwrap())
