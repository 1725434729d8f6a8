"""
Subscription service - owns the user/topic membership relation.

Membership changes are read-modify-write on a topic's ``users``. Two
requests changing the same topic would otherwise race and lose one of the
updates, so every change holds the topic's entry in ``membership_locks``
from load to commit, and the row is selected FOR UPDATE where the database
supports it. The composite key of ``topic_subscription`` rejects a
duplicate membership even if both guards were bypassed.
"""
import logging
from typing import Set
from sqlmodel import Session, select

from mdd_api.core.config import settings
from mdd_api.core.exceptions import ErrorKind, NotFoundError
from mdd_api.core.locks import membership_locks
from mdd_api.core.result import service_operation
from mdd_api.models.topic import Topic
from mdd_api.models.topic_subscription import TopicSubscription
from mdd_api.models.user import User
from mdd_api.services.topic_service import require_topic

logger = logging.getLogger(__name__)


def _membership_ids(topic_id: int, user: User) -> dict:
    return {"topic_id": topic_id, "user_id": user.id}


def _load_for_membership_change(session: Session, topic_id: int, user: User):
    """Load the topic with a fresh member list, and the session's copy of ``user``."""
    topic = require_topic(session, topic_id, with_for_update=True)
    # Another session may have changed the membership since it was loaded here
    session.expire(topic, ["users"])

    member = session.get(User, user.id) if user.id is not None else None
    if member is None:
        raise NotFoundError("User not found", user_id=user.id)
    return topic, member


@service_operation(
    "subscribe",
    ErrorKind.SUBSCRIPTION_FAILURE,
    "Failed to subscribe to topic",
    identify=_membership_ids,
)
def subscribe(session: Session, topic_id: int, user: User) -> str:
    """
    Add ``user`` to the members of a topic.

    Subscribing twice is harmless: a user who is already a member is left
    as is.

    Raises (as a failed Result):
        NotFoundError: If the topic or the user does not exist
    """
    logger.info(f"User(id): {user.id} subscribe to topic(id): {topic_id}")
    with membership_locks.hold(topic_id, timeout=settings.membership_lock_timeout):
        topic, member = _load_for_membership_change(session, topic_id, user)
        if member not in topic.users:
            topic.users.append(member)
        session.add(topic)
        session.commit()
    return "Subscribed successfully"


@service_operation(
    "unsubscribe",
    ErrorKind.SUBSCRIPTION_FAILURE,
    "Failed to unsubscribe from topic",
    identify=_membership_ids,
)
def unsubscribe(session: Session, topic_id: int, user: User) -> str:
    """Remove ``user`` from the members of a topic. Non-members are not an error."""
    logger.info(f"User(id): {user.id} unsubscribe from topic(id): {topic_id}")
    with membership_locks.hold(topic_id, timeout=settings.membership_lock_timeout):
        topic, member = _load_for_membership_change(session, topic_id, user)
        if member in topic.users:
            topic.users.remove(member)
        session.add(topic)
        session.commit()
    return "Unsubscribed successfully"


@service_operation(
    "my_subscriptions",
    ErrorKind.LOOKUP_FAILURE,
    "Failed to get your subscriptions",
    identify=lambda user: {"user_id": user.id},
)
def my_subscriptions(session: Session, user: User) -> Set[Topic]:
    """Return the topics ``user`` is subscribed to."""
    logger.info(f"Get my subscriptions for user(id): {user.id}")
    statement = (
        select(Topic)
        .join(TopicSubscription, TopicSubscription.topic_id == Topic.id)  # type: ignore[arg-type]
        .where(TopicSubscription.user_id == user.id)
    )
    return set(session.exec(statement).all())
