from contextlib import contextmanager

from fastapi import HTTPException

from pawsocial.core.errors import (
    BlockedError,
    InvalidDecisionError,
    InvalidIdentifierError,
    InvalidRuleError,
    InvalidScopeError,
    NotFoundError,
    PermissionDeniedError,
    SelfReferenceError,
    TransactionConflictError,
)


# Blocks and missing accounts share one response so a block is never revealed
NOT_FOUND_DETAIL = "Profile not found"


@contextmanager
def http_errors():
    """Translate core errors raised inside the block into HTTPException."""
    try:
        yield
    except (NotFoundError, BlockedError):
        raise HTTPException(404, NOT_FOUND_DETAIL)
    except (
        SelfReferenceError,
        InvalidScopeError,
        InvalidRuleError,
        InvalidDecisionError,
        InvalidIdentifierError,
    ) as exc:
        raise HTTPException(400, str(exc))
    except PermissionDeniedError as exc:
        raise HTTPException(403, str(exc))
    except TransactionConflictError as exc:
        raise HTTPException(409, str(exc))
