"""
User service for business logic related to user operations.

Every operation takes the request session first and returns a ``Result``;
see ``mdd_api.core.result``.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from mdd_api.core.exceptions import ConflictError, ErrorKind, NotFoundError
from mdd_api.core.result import service_operation
from mdd_api.models.user import User

logger = logging.getLogger(__name__)


def _require_user(session: Session, user_id: Optional[int]) -> User:
    """Load a user by id or raise ``NotFoundError``."""
    user = session.get(User, user_id) if user_id is not None else None
    if user is None:
        raise NotFoundError("User not found", user_id=user_id)
    return user


@service_operation("find_all_users", ErrorKind.LOOKUP_FAILURE, "We could not find any users")
def find_all_users(session: Session) -> List[User]:
    """Return every user; an empty list is a valid answer."""
    logger.info("find_all_users")
    return list(session.exec(select(User)).all())


@service_operation(
    "find_user_by_id",
    ErrorKind.LOOKUP_FAILURE,
    "We could not find your user",
    identify=lambda user_id: {"user_id": user_id},
)
def find_user_by_id(session: Session, user_id: int) -> User:
    logger.info(f"find_user_by_id - id: {user_id}")
    return _require_user(session, user_id)


@service_operation(
    "find_user_by_username",
    ErrorKind.LOOKUP_FAILURE,
    "We could not find your user",
    identify=lambda username: {"username": username},
)
def find_user_by_username(session: Session, username: str) -> User:
    logger.info(f"find_user_by_username - username: {username}")
    user = session.exec(select(User).where(User.username == username)).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


@service_operation("find_user_by_email", ErrorKind.LOOKUP_FAILURE, "We could not find your user")
def find_user_by_email(session: Session, email: str) -> User:
    logger.info("find_user_by_email")
    user = session.exec(select(User).where(User.email == email)).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


@service_operation("create_user", ErrorKind.VALIDATION_FAILURE, "Failed to create user", expose_cause=True)
def create_user(session: Session, user: User) -> User:
    """
    Register a new user.

    Email and username must both be unused; that is checked before anything
    is written. The client-supplied id is discarded so the database assigns
    one, and both timestamps are stamped with the same instant.

    Raises (as a failed Result):
        ConflictError: If the email or username is already taken
    """
    logger.info("create_user")
    if session.exec(select(User).where(User.email == user.email)).first():
        raise ConflictError("User with this email already exists")
    if session.exec(select(User).where(User.username == user.username)).first():
        raise ConflictError("User with this username already exists")

    user.id = None
    now = datetime.now(timezone.utc)
    user.created_at = now
    user.updated_at = now

    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # A concurrent registration took the email or username after the check
        raise ConflictError("User with this email or username already exists")
    session.refresh(user)

    logger.info(f"Created user {user.id}")
    return user


@service_operation(
    "update_user",
    ErrorKind.VALIDATION_FAILURE,
    "Failed to update user",
    identify=lambda user: {"user_id": user.id},
)
def update_user(session: Session, user: User) -> User:
    """
    Replace a user's profile with ``user``.

    Username, email, password and the post/comment associations are all
    overwritten with the incoming values; nothing is merged and the last
    write wins.
    """
    logger.info(f"update_user - id: {user.id}")
    existing = _require_user(session, user.id)

    existing.username = user.username
    existing.email = user.email
    existing.password = user.password
    existing.posts = list(user.posts)
    existing.comments = list(user.comments)
    existing.updated_at = datetime.now(timezone.utc)

    session.add(existing)
    session.commit()
    session.refresh(existing)
    return existing


@service_operation(
    "delete_user",
    ErrorKind.VALIDATION_FAILURE,
    "Failed to delete user",
    identify=lambda user_id: {"user_id": user_id},
)
def delete_user(session: Session, user_id: int) -> str:
    """Delete a user. Their topic memberships go with them."""
    logger.info(f"delete_user - id: {user_id}")
    user = _require_user(session, user_id)

    session.delete(user)
    session.commit()
    return "User deleted"
