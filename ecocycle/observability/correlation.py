"""
Request correlation IDs.

The ID lives in a ContextVar so it follows the request through awaits,
services and log records without being passed around explicitly.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_correlation_id: ContextVar[str] = ContextVar("ecocycle_correlation_id", default="")

# Longer inbound IDs are replaced rather than echoed back
MAX_INBOUND_LENGTH = 128


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Store ``correlation_id`` (or a fresh uuid4) for the current context and return it."""
    if not correlation_id or len(correlation_id) > MAX_INBOUND_LENGTH:
        correlation_id = uuid.uuid4().hex
    _correlation_id.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    The previous value is restored on exit, so nested scopes (background
    jobs started from a request) do not leak their ID outward.
    """
    token = _correlation_id.set("")
    try:
        yield set_correlation_id(correlation_id)
    finally:
        _correlation_id.reset(token)
