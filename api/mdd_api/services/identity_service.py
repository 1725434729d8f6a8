"""
Identity service - turns a login identifier into an authentication principal.

This is the only piece the login flow needs from the user store. It does
not check the password; the caller compares the submitted credential with
``Principal.password_hash``.
"""
import logging
from typing import Optional
from sqlmodel import Session, select

from mdd_api.core.config import settings
from mdd_api.core.exceptions import AuthenticationError, ErrorKind
from mdd_api.core.result import service_operation
from mdd_api.models.user import User
from mdd_api.schemas.auth import Principal

logger = logging.getLogger(__name__)

# Login identifier name -> column it is matched against
LOGIN_COLUMNS = {
    "email": User.email,
    "username": User.username,
}


@service_operation("load_principal", ErrorKind.LOOKUP_FAILURE, "We could not load your account")
def load_principal(session: Session, identifier: str, login_identifier: Optional[str] = None) -> Principal:
    """
    Resolve ``identifier`` to a principal.

    Args:
        session: Database session
        identifier: The email or username typed at login
        login_identifier: "email" or "username"; defaults to the configured one

    Returns:
        Principal with the canonical identifier, the stored password hash and
        no authorities

    Raises (as a failed Result):
        AuthenticationError: If no user matches the identifier
    """
    key = login_identifier or settings.login_identifier
    if key not in LOGIN_COLUMNS:
        raise ValueError(f"Unsupported login identifier: {key}")

    logger.info(f"load_principal - by {key}")
    user = session.exec(select(User).where(LOGIN_COLUMNS[key] == identifier)).first()
    if user is None:
        raise AuthenticationError(f"No user with this {key}")

    return Principal(identifier=getattr(user, key), password_hash=user.password)
