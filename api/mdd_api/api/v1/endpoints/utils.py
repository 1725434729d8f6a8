"""
Utility functions for endpoint operations.
"""
from fastapi import Depends
from sqlmodel import Session

from mdd_api.core.database import get_session
from mdd_api.models.user import User
from mdd_api.services import user_service


def get_current_user(
    user_id: int,
    session: Session = Depends(get_session)
) -> User:
    """
    Resolve the calling user from the ``user_id`` query parameter.

    Raises NotFoundError (404) when the user does not exist.
    """
    return user_service.find_user_by_id(session, user_id).unwrap()
