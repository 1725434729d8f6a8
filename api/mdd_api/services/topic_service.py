"""
Topic service for business logic related to topic operations.
"""
import logging
from typing import List, Optional
from sqlmodel import Session, select

from mdd_api.core.exceptions import ErrorKind, NotFoundError
from mdd_api.core.locks import membership_locks
from mdd_api.core.result import service_operation
from mdd_api.models.topic import Topic

logger = logging.getLogger(__name__)


def require_topic(session: Session, topic_id: Optional[int], **options) -> Topic:
    """Load a topic by id or raise ``NotFoundError``. ``options`` go to ``Session.get``."""
    topic = session.get(Topic, topic_id, **options) if topic_id is not None else None
    if topic is None:
        raise NotFoundError("Topic not found", topic_id=topic_id)
    return topic


@service_operation("find_all_topics", ErrorKind.LOOKUP_FAILURE, "We could not find any topics")
def find_all_topics(session: Session) -> List[Topic]:
    logger.info("find_all_topics")
    return list(session.exec(select(Topic)).all())


@service_operation(
    "find_topic_by_id",
    ErrorKind.LOOKUP_FAILURE,
    "We could not find your topic",
    identify=lambda topic_id: {"topic_id": topic_id},
)
def find_topic_by_id(session: Session, topic_id: int) -> Topic:
    logger.info(f"find_topic_by_id - id: {topic_id}")
    return require_topic(session, topic_id)


@service_operation("create_topic", ErrorKind.VALIDATION_FAILURE, "Failed to create topic")
def create_topic(session: Session, topic: Topic) -> Topic:
    """Create a topic. Names are not unique; the client id is discarded."""
    logger.info("create_topic")
    topic.id = None
    session.add(topic)
    session.commit()
    session.refresh(topic)
    return topic


@service_operation(
    "update_topic",
    ErrorKind.VALIDATION_FAILURE,
    "Failed to update topic",
    identify=lambda topic: {"topic_id": topic.id},
)
def update_topic(session: Session, topic: Topic) -> Topic:
    """Rename a topic. Its membership is left alone."""
    logger.info(f"update_topic - id: {topic.id}")
    existing = require_topic(session, topic.id)
    existing.name = topic.name
    session.add(existing)
    session.commit()
    session.refresh(existing)
    return existing


@service_operation(
    "delete_topic",
    ErrorKind.VALIDATION_FAILURE,
    "Failed to delete topic",
    identify=lambda topic_id: {"topic_id": topic_id},
)
def delete_topic(session: Session, topic_id: int) -> str:
    logger.info(f"delete_topic - id: {topic_id}")
    topic = require_topic(session, topic_id)
    session.delete(topic)
    session.commit()
    membership_locks.discard(topic_id)
    return "Topic deleted"
