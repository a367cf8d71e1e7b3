"""
Can ``viewer`` see ``subject``'s content in ``scope``?

Checks run in a fixed order and the first match wins:

1. the owner always sees their own content
2. a block in either direction denies, whatever the privacy settings say
3. the subject's rule for the scope (``followers`` when never set)
4. the rule itself: public / private / followers / friends / custom

The answer is computed from the live tables on every call.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from pawsocial.core.accounts import require_account, validate_id
from pawsocial.core.blocking import is_blocked
from pawsocial.core.constants import (
    MODERATOR_ROLES,
    Decision,
    ExceptionDecision,
    Reason,
    Rule,
    Scope,
)
from pawsocial.core.errors import PermissionDeniedError
from pawsocial.core.privacy_rules import get_effective_rule, get_exception, parse_scope
from pawsocial.core.relationships import are_friends, follows


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    decision: Decision
    reason: Reason
    # Rule that produced the decision; None when steps 1-2 decided
    rule: Optional[Rule] = None

    @property
    def allowed(self) -> bool:
        return self.decision == Decision.ALLOW

    @property
    def conceals_existence(self) -> bool:
        """Blocked viewers must see "not found", never "private"."""
        return self.reason == Reason.BLOCKED


def _allow(reason: Reason, rule: Optional[Rule] = None) -> Resolution:
    return Resolution(Decision.ALLOW, reason, rule)


def _deny(reason: Reason, rule: Optional[Rule] = None) -> Resolution:
    return Resolution(Decision.DENY, reason, rule)


def check_relationship_gate(
    db: Session, viewer_id: str, subject_id: str
) -> Optional[Resolution]:
    """Steps 1-2. None means the privacy rule decides."""
    if viewer_id == subject_id:
        return _allow(Reason.OWNER)
    if is_blocked(db, viewer_id, subject_id):
        return _deny(Reason.BLOCKED)
    return None


def apply_rule(
    db: Session, viewer_id: str, subject_id: str, scope: Scope, rule: Rule
) -> Resolution:
    """Step 4 for an already-determined rule."""
    if rule == Rule.PUBLIC:
        return _allow(Reason.PUBLIC, rule)

    if rule == Rule.PRIVATE:
        return _deny(Reason.PRIVATE, rule)

    if rule == Rule.FOLLOWERS:
        if follows(db, viewer_id, subject_id):
            return _allow(Reason.FOLLOWER, rule)
        return _deny(Reason.NOT_FOLLOWER, rule)

    if rule == Rule.FRIENDS:
        if are_friends(db, viewer_id, subject_id):
            return _allow(Reason.FRIEND, rule)
        return _deny(Reason.NOT_FRIEND, rule)

    # custom: only listed viewers get an answer other than deny
    decision = get_exception(db, subject_id, scope, viewer_id)
    if decision == ExceptionDecision.ALLOW:
        return _allow(Reason.EXCEPTION_ALLOW, rule)
    if decision == ExceptionDecision.DENY:
        return _deny(Reason.EXCEPTION_DENY, rule)
    return _deny(Reason.NOT_LISTED, rule)


def resolve(db: Session, viewer_id: str, subject_id: str, scope) -> Resolution:
    """
    Decide whether viewer may see subject's content in scope.

    Raises only for malformed input (empty ids, unknown scope). A missing
    rule or exception is a normal case with a defined default.
    """
    viewer_id = validate_id(viewer_id, "viewer_id")
    subject_id = validate_id(subject_id, "subject_id")
    scope = parse_scope(scope)

    result = check_relationship_gate(db, viewer_id, subject_id)
    if result is None:
        rule = get_effective_rule(db, subject_id, scope)
        result = apply_rule(db, viewer_id, subject_id, scope, rule)

    logger.debug(
        "resolve viewer=%s subject=%s scope=%s decision=%s reason=%s",
        viewer_id, subject_id, scope.value, result.decision.value, result.reason.value,
    )
    return result


def resolve_for_moderation(
    db: Session,
    moderator_id: str,
    subject_id: str,
    scope,
    override_blocks: bool = False,
) -> Resolution:
    """
    Moderation review: admins skip the privacy rule but blocks still apply.

    ``override_blocks=True`` is the separate moderation view that also
    looks past blocks. Neither path is reachable through ``resolve``.
    """
    moderator_id = validate_id(moderator_id, "moderator_id")
    subject_id = validate_id(subject_id, "subject_id")
    scope = parse_scope(scope)

    moderator = require_account(db, moderator_id)
    if moderator.role not in MODERATOR_ROLES:
        raise PermissionDeniedError("Moderator role required")

    require_account(db, subject_id)

    if moderator_id == subject_id:
        return _allow(Reason.OWNER)

    if not override_blocks and is_blocked(db, moderator_id, subject_id):
        return _deny(Reason.BLOCKED)

    logger.info(
        "moderation access moderator=%s subject=%s scope=%s override_blocks=%s",
        moderator_id, subject_id, scope.value, override_blocks,
    )
    return _allow(Reason.MODERATION)
