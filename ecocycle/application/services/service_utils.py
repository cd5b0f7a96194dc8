"""
Shared helpers for service orchestrators.

Dependencies: pydantic, sqlalchemy, tenacity (via ecocycle.core.retry)
System role: Transaction ownership, read retries and input validation for services
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecocycle.configs import get_settings
from ecocycle.core.exceptions import DatabaseError, EcoCycleError, OperationTimeoutError, ValidationError
from ecocycle.core.retry import retrying, with_timeout

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
T = TypeVar("T")


def parse_input(model: type[InputT], data: InputT | dict) -> InputT:
    """
    Validate ``data`` against ``model``.

    Already-built instances pass straight through.

    Raises:
        ValidationError: First failing field and message
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(
            first.get("msg", "Invalid input"),
            field=field,
            details={"errors": len(e.errors())},
        ) from e


@asynccontextmanager
async def transaction(db: AsyncSession, operation: str, **context) -> AsyncIterator[AsyncSession]:
    """
    Run the block as one unit of work: commit on success, roll back on error.

    Categorised errors propagate unchanged. Constraint violations become
    ValidationError; other SQLAlchemy failures become DatabaseError.

    Usage:
        async with transaction(self.db, "redeem_reward", user_id=str(user_id)):
            ...
    """
    try:
        yield db
        await db.commit()
    except EcoCycleError:
        await db.rollback()
        raise
    except IntegrityError as e:
        await db.rollback()
        logger.warning(
            f"{operation} violated a constraint",
            extra={"operation": operation, "error": str(e.orig), **context},
        )
        raise ValidationError("Operation violates a data constraint", details={"operation": operation}) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"{operation} failed",
            extra={"operation": operation, "error": str(e), "error_type": type(e).__name__, **context},
        )
        raise DatabaseError(details={"operation": operation}) from e
    except Exception:
        await db.rollback()
        raise


async def read_with_retry(
    db: AsyncSession,
    operation: str,
    query: Callable[[], Awaitable[T]],
    **context,
) -> T:
    """
    Run a read-only query under the API timeout, retrying transient
    failures with backoff.

    The session is rolled back between attempts so a dropped connection
    does not poison the next one. Attempts and base delay come from
    ``ApiSettings``.

    Raises:
        DatabaseError: Query still failing after the last attempt
        OperationTimeoutError: Every attempt ran past the timeout
    """
    api = get_settings().api
    try:
        async for attempt in retrying(api.retry_attempts, api.retry_delay_seconds):
            with attempt:
                try:
                    return await with_timeout(query(), api.timeout_seconds)
                except (SQLAlchemyError, OperationTimeoutError):
                    await db.rollback()
                    raise
    except SQLAlchemyError as e:
        logger.error(
            f"{operation} failed",
            extra={"operation": operation, "error": str(e), "error_type": type(e).__name__, **context},
        )
        raise DatabaseError(details={"operation": operation}) from e
    raise RuntimeError("unreachable")  # pragma: no cover
