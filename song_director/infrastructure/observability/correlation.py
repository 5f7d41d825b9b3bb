"""Per-request correlation IDs for section traffic.

LoggingMiddleware opens a correlation scope when a request arrives and
closes it when the response is returned. A long-poll can be held open
for the whole wait window; the wait and the disconnect listener are
started as tasks inside that scope, so they copy the context. Their log
lines (and ``longpoll_client_disconnected``) carry the ID of the waiting
request, while ``section_committed`` carries the ID of the request that
made the change.

Clients may send their own ``X-Correlation-ID`` (a viewer can reuse one
per tab across successive polls). Anything that is not a short token is
replaced with a fresh UUID so log fields stay greppable.
"""

import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any
from uuid import uuid4

CORRELATION_HEADER = "X-Correlation-ID"

_ACCEPTED_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Fresh UUID4 string."""
    return str(uuid4())


def accept_correlation_id(header_value: str | None) -> str:
    """ID to use for a request given its X-Correlation-ID header.

    Args:
        header_value: Raw header value, or None when absent.

    Returns:
        The header value when it is a short token, otherwise a new ID.
    """
    if header_value and _ACCEPTED_ID.fullmatch(header_value):
        return header_value
    return generate_correlation_id()


def get_correlation_id() -> str:
    """ID of the request being handled, or "" outside a request."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """Set the ID for the current context; the token undoes it."""
    return _correlation_id.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Bind correlation_id for the duration of a request.

    Tasks created inside the block keep the ID after the block exits,
    since they hold their own copy of the context.
    """
    token = set_correlation_id(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the request's correlation_id.

    A correlation_id bound explicitly on the logger is left alone.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
