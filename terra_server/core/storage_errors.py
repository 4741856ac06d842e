# terra_server/core/storage_errors.py

from functools import wraps
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from terra_server.core.exceptions import InternalError
from terra_server.core.logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])

logger = get_logger(__name__)


def wraps_storage_errors(action: str) -> Callable[[F], F]:
    """Turn driver/ORM failures into an opaque InternalError.

    Domain errors raised inside the wrapped call pass through untouched.
    """

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error("storage_error", action=action, error=type(e).__name__, exc_info=True)
                raise InternalError(f"Failed to {action}") from e

        return wrapper  # type: ignore[return-value]

    return decorator
