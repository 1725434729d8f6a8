"""
Result values returned by service operations.

Services never raise to their callers. Each public operation is wrapped
with ``service_operation``, which turns the typed exceptions raised inside
it (and any unexpected error) into a failed ``Result`` carrying an
``ErrorKind``. Callers branch on ``result.kind`` or call ``unwrap()`` to
get the value back, re-raising the typed exception on failure.
"""
import logging
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from sqlmodel import Session

from mdd_api.core.exceptions import EXCEPTIONS_BY_KIND, ErrorKind, MddException

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceError:
    """What went wrong, in a form callers can match on."""
    kind: ErrorKind
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    def to_exception(self) -> MddException:
        return EXCEPTIONS_BY_KIND[self.kind](self.message, **self.context)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either the value of a successful operation or its error."""
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, **context: Any) -> "Result[T]":
        return cls(error=ServiceError(kind=kind, message=message, context=context))

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

    def unwrap(self) -> T:
        """Return the value, or raise the exception matching the error kind."""
        if self.error is not None:
            raise self.error.to_exception()
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self.value if self.error is None else default  # type: ignore[return-value]


def service_operation(
    name: str,
    failure: ErrorKind,
    message: str,
    identify: Optional[Callable[..., Dict[str, Any]]] = None,
    expose_cause: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., Result[T]]]:
    """
    Wrap a service function so that it returns a ``Result``.

    The wrapped function takes the session as its first argument. On any
    error the session is rolled back, so a failed operation leaves no
    partial writes behind.

    Args:
        name: Operation name used in log lines
        failure: Kind reported for unexpected errors
        message: Client-facing message for unexpected errors
        identify: Builds the key identifiers of a call from its arguments
            (session excluded); they are logged and attached to the error
        expose_cause: Append the underlying error message to ``message``
    """
    def decorator(func: Callable[..., T]) -> Callable[..., Result[T]]:
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(session: Session, *args: Any, **kwargs: Any) -> Result[T]:
            try:
                return Result.success(func(session, *args, **kwargs))
            except MddException as exc:
                session.rollback()
                context = {**_identifiers(identify, args, kwargs), **exc.context}
                logger.warning(f"{name} rejected {context}: {exc.kind.value}: {exc.message}")
                return Result.failure(exc.kind, exc.message, **context)
            except Exception as exc:
                session.rollback()
                context = _identifiers(identify, args, kwargs)
                logger.error(f"{name} failed {context}: {exc}", exc_info=True)
                detail = f"{message}: {exc}" if expose_cause else message
                return Result.failure(failure, detail, **context)

        return wrapper

    return decorator


def _identifiers(
    identify: Optional[Callable[..., Dict[str, Any]]],
    args: tuple,
    kwargs: Dict[str, Any],
) -> Dict[str, Any]:
    if identify is None:
        return {}
    try:
        return identify(*args, **kwargs)
    except Exception:
        # Identifiers are best effort, the original failure is what gets reported
        return {}
