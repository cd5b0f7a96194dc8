"""
Unit tests for retry and timeout helpers.

System role: Verification of backoff policy and non-retryable errors
"""

import asyncio

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from ecocycle.core.exceptions import (
    DatabaseError,
    InsufficientCoinsError,
    NetworkError,
    OperationTimeoutError,
    ValidationError,
)
from ecocycle.core.retry import is_transient_error, with_retry, with_timeout


class Flaky:
    """Fails ``failures`` times with ``error`` then returns "ok"."""

    def __init__(self, failures: int, error: Exception) -> None:
        self.failures = failures
        self.error = error
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return "ok"


class TestIsTransientError:
    @pytest.mark.parametrize(
        "error",
        [
            NetworkError(),
            DatabaseError(),
            OperationTimeoutError(),
            ConnectionResetError(),
            TimeoutError(),
            OperationalError("SELECT 1", {}, Exception("server closed the connection")),
        ],
    )
    def test_transient(self, error: BaseException) -> None:
        assert is_transient_error(error)

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            InsufficientCoinsError(10, 5),
            IntegrityError("INSERT", {}, Exception("check constraint")),
            ValueError("nope"),
        ],
    )
    def test_not_transient(self, error: BaseException) -> None:
        assert not is_transient_error(error)


class TestWithRetry:
    async def test_retries_transient_errors_until_success(self) -> None:
        flaky = Flaky(2, NetworkError())

        result = await with_retry(max_attempts=3, delay=0)(flaky)()

        assert result == "ok"
        assert flaky.calls == 3

    async def test_reraises_after_last_attempt(self) -> None:
        flaky = Flaky(5, NetworkError("still down"))

        with pytest.raises(NetworkError, match="still down"):
            await with_retry(max_attempts=3, delay=0)(flaky)()

        assert flaky.calls == 3

    async def test_business_errors_are_not_retried(self) -> None:
        flaky = Flaky(1, InsufficientCoinsError(100, 10))

        with pytest.raises(InsufficientCoinsError):
            await with_retry(max_attempts=3, delay=0)(flaky)()

        assert flaky.calls == 1

    async def test_custom_predicate(self) -> None:
        flaky = Flaky(1, ValueError("retry me"))

        result = await with_retry(max_attempts=2, delay=0, should_retry=lambda e: isinstance(e, ValueError))(flaky)()

        assert result == "ok"
        assert flaky.calls == 2


class TestWithTimeout:
    async def test_returns_result_in_time(self) -> None:
        async def quick() -> int:
            return 7

        assert await with_timeout(quick(), 1) == 7

    async def test_raises_timeout_error(self) -> None:
        with pytest.raises(OperationTimeoutError) as exc_info:
            await with_timeout(asyncio.sleep(1), 0.01)

        assert exc_info.value.details == {"timeout_seconds": 0.01}
