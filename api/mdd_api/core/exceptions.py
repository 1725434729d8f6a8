"""
Custom exceptions for the application.

Each exception carries the ``ErrorKind`` it is reported under once it
crosses a service boundary, plus the identifiers it was raised for.
"""
from enum import Enum
from typing import Any, Dict, Type


class ErrorKind(str, Enum):
    """Kinds of failure a service operation can report."""
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_FAILURE = "validation_failure"
    SUBSCRIPTION_FAILURE = "subscription_failure"
    LOOKUP_FAILURE = "lookup_failure"
    AUTHENTICATION_FAILURE = "authentication_failure"


class MddException(Exception):
    """Base exception for all MDD application exceptions."""
    kind: ErrorKind = ErrorKind.VALIDATION_FAILURE

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context


class NotFoundError(MddException):
    """Raised when a requested resource is not found."""
    kind = ErrorKind.NOT_FOUND


class ConflictError(MddException):
    """Raised when there's a conflict (e.g., duplicate entry)."""
    kind = ErrorKind.CONFLICT


class ValidationError(MddException):
    """Raised when a mutation fails."""
    kind = ErrorKind.VALIDATION_FAILURE


class SubscriptionError(MddException):
    """Raised when a topic membership change fails."""
    kind = ErrorKind.SUBSCRIPTION_FAILURE


class LookupFailureError(MddException):
    """Raised when a query fails for a reason other than absence."""
    kind = ErrorKind.LOOKUP_FAILURE


class AuthenticationError(MddException):
    """Raised when authentication fails."""
    kind = ErrorKind.AUTHENTICATION_FAILURE


EXCEPTIONS_BY_KIND: Dict[ErrorKind, Type[MddException]] = {
    exc.kind: exc
    for exc in (
        NotFoundError,
        ConflictError,
        ValidationError,
        SubscriptionError,
        LookupFailureError,
        AuthenticationError,
    )
}
