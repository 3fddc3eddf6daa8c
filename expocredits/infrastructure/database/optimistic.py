"""Optimistic transaction runner.

An operation reads the rows it needs together with their version, then writes
them back with ``UPDATE ... WHERE version = :expected``. A write that matches
no rows raises :class:`WriteConflictError`. The runner rolls the whole
transaction back and calls the operation again, with a fresh session, up to
``max_attempts`` times.

Only detected conflicts are retried. Business errors and timeouts propagate
unchanged, and driver failures surface as
:class:`~expocredits.modules.common.exceptions.StoreUnavailableError`.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expocredits.modules.common.exceptions import ConflictExceededRetriesError, StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# serialization_failure, deadlock_detected
_PG_CONFLICT_CODES = {"40001", "40P01"}


class WriteConflictError(Exception):
    """A conditional write found the row at a different version than was read."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Concurrent modification of {key}")
        self.key = key


def is_write_conflict(exc: DBAPIError) -> bool:
    """Whether a driver error means "someone else wrote first"."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in _PG_CONFLICT_CODES:
        return True
    return "database is locked" in str(orig).lower()


async def run_optimistic(
    session_factory: async_sessionmaker[AsyncSession],
    operation: Callable[[AsyncSession], Awaitable[T]],
    *,
    max_attempts: int,
    backoff_seconds: float = 0.0,
    label: str = "transaction",
) -> T:
    for attempt in range(1, max_attempts + 1):
        try:
            async with session_factory() as session:
                async with session.begin():
                    return await operation(session)
        except WriteConflictError as exc:
            logger.info("%s attempt %d/%d conflicted on %s", label, attempt, max_attempts, exc.key)
        except DBAPIError as exc:
            if not is_write_conflict(exc):
                logger.error("%s failed in the store: %s", label, exc)
                raise StoreUnavailableError(str(exc.orig)) from exc
            logger.info("%s attempt %d/%d hit a store-level write conflict", label, attempt, max_attempts)
        except SQLAlchemyError as exc:
            logger.error("%s failed in the store: %s", label, exc)
            raise StoreUnavailableError(str(exc)) from exc

        if attempt < max_attempts and backoff_seconds > 0:
            await asyncio.sleep(backoff_seconds * attempt * random.uniform(0.5, 1.5))

    logger.warning("%s gave up after %d conflicting attempts", label, max_attempts)
    raise ConflictExceededRetriesError(max_attempts)


__all__ = ["WriteConflictError", "is_write_conflict", "run_optimistic"]
