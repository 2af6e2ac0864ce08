"""Per-request correlation IDs.

The current request's correlation ID lives in a context variable so that
any code running for the request (handlers, the error translation layer,
log calls) can read it without it being passed around.
"""

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from loguru import logger

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class RequestContext:
    """Read the correlation ID of the current request.

    The ID is set through correlation_scope().
    """

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID from the current context.

        Returns:
            str | None: The correlation ID if set, None otherwise.
        """
        return _correlation_id_var.get()


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Make ``correlation_id`` current for the duration of the block.

    The ID is readable through RequestContext and bound to every log record
    written inside the block. The previous value is restored on exit.

    Args:
        correlation_id: ID of the request being handled.

    Yields:
        str: The correlation ID.
    """
    token = _correlation_id_var.set(correlation_id)
    try:
        with logger.contextualize(correlation_id=correlation_id):
            yield correlation_id
    finally:
        _correlation_id_var.reset(token)


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracking.

    Returns:
        str: A string representation of a UUID4.

    Examples:
        >>> len(generate_correlation_id())
        36
    """
    return str(uuid.uuid4())
