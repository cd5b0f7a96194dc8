"""
Retry and timeout helpers for async operations.

Failed operations are retried with exponential backoff
(delay * 2**(attempt - 1)) up to a fixed attempt count. Business-rule
errors are never retried.

Dependencies: tenacity, sqlalchemy
System role: Resilience for persistence calls and outbound HTTP
"""

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from ecocycle.core.exceptions import EcoCycleError, OperationTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY_SECONDS = 1.0


def is_transient_error(error: BaseException) -> bool:
    """
    Decide whether a failure is worth retrying.

    Categorised errors carry their own ``retryable`` flag. Connection
    drops, timeouts and driver-level operational errors are transient.
    """
    if isinstance(error, EcoCycleError):
        return error.retryable
    if isinstance(error, DBAPIError):
        return isinstance(error, OperationalError) or error.connection_invalidated
    return isinstance(error, (ConnectionError, TimeoutError, asyncio.TimeoutError))


def _log_retry(retry_state) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying after transient failure",
        extra={
            "attempt": retry_state.attempt_number,
            "error": str(error),
            "error_type": type(error).__name__,
        },
    )


def retrying(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    should_retry: Callable[[BaseException], bool] = is_transient_error,
) -> AsyncRetrying:
    """
    Build an ``AsyncRetrying`` controller with the application's policy.

    Args:
        max_attempts: Total attempts including the first
        delay: Base delay in seconds; attempt n waits delay * 2**(n-1)
        should_retry: Predicate deciding which exceptions are retried

    Returns:
        AsyncRetrying: Controller that re-raises the last error
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=delay),
        retry=retry_if_exception(should_retry),
        before_sleep=_log_retry,
        reraise=True,
    )


def with_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = DEFAULT_DELAY_SECONDS,
    should_retry: Callable[[BaseException], bool] = is_transient_error,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorate an async callable with exponential-backoff retry.

    Usage:
        @with_retry(max_attempts=3, delay=0.5)
        async def fetch_profile(...): ...
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            async for attempt in retrying(max_attempts, delay, should_retry):
                with attempt:
                    return await func(*args, **kwargs)
            raise RuntimeError("unreachable")  # pragma: no cover

        return wrapper

    return decorator


async def with_timeout(awaitable: Awaitable[T], seconds: float) -> T:
    """
    Await ``awaitable`` for at most ``seconds``.

    Raises:
        OperationTimeoutError: When the deadline passes first
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        raise OperationTimeoutError(
            f"Operation timed out after {seconds}s",
            {"timeout_seconds": seconds},
        ) from e
