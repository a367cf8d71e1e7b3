class VisibilityEngineError(Exception):
    """Base class for every error raised by the relationship/visibility core."""


class SelfReferenceError(VisibilityEngineError):
    """The acting account targeted itself where that is not allowed."""


class NotFoundError(VisibilityEngineError):
    """A referenced account does not exist."""


class BlockedError(VisibilityEngineError):
    """A block between the pair vetoes the operation."""


class InvalidIdentifierError(VisibilityEngineError):
    """An ID or required text field was empty."""


class InvalidScopeError(VisibilityEngineError):
    pass


class InvalidRuleError(VisibilityEngineError):
    pass


class InvalidDecisionError(VisibilityEngineError):
    pass


class PermissionDeniedError(VisibilityEngineError):
    """The acting account lacks the role the operation requires."""


class TransactionConflictError(VisibilityEngineError):
    """
    The transaction could not commit atomically and was rolled back.
    Retry the whole operation; never re-apply part of it.
    """
