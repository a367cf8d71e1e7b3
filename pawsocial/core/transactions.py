import logging
from contextlib import contextmanager
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from pawsocial.core.errors import TransactionConflictError
from pawsocial.logging_config import format_operation


logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def atomic(db: Session, operation: str):
    """
    Unit of work: commit everything done inside the block, or nothing.

    Database-level conflicts (duplicate key from a racing insert, lock
    timeouts, serialization failures) are rolled back and re-raised as
    TransactionConflictError. Any other exception is rolled back and
    propagated unchanged.
    """
    try:
        yield db
        db.commit()
    except (IntegrityError, OperationalError) as exc:
        db.rollback()
        logger.warning(format_operation(operation, "conflict", error=type(exc).__name__))
        raise TransactionConflictError(
            f"{operation} could not be committed; retry the operation"
        ) from exc
    except Exception:
        db.rollback()
        raise


def with_retries(fn: Callable[[], T], attempts: int = 3) -> T:
    """Re-run ``fn`` from scratch while it keeps raising TransactionConflictError."""
    attempts = max(1, attempts)
    for attempt in range(1, attempts + 1):
        try:
            return fn()
        except TransactionConflictError:
            if attempt == attempts:
                raise
            logger.info(format_operation("retry", "pending", attempt=attempt))
