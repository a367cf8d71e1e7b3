import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from pawsocial.core.accounts import lock_accounts, validate_id
from pawsocial.core.constants import DEFAULT_RULE, ExceptionDecision, Rule, Scope
from pawsocial.core.errors import (
    InvalidDecisionError,
    InvalidRuleError,
    InvalidScopeError,
    SelfReferenceError,
)
from pawsocial.core.transactions import atomic
from pawsocial.logging_config import format_operation
from pawsocial.models.privacy import PrivacyException, PrivacyRule


logger = logging.getLogger(__name__)


# --------------------------------------------------
# VALIDATION
# --------------------------------------------------
def parse_scope(value) -> Scope:
    try:
        return Scope(value)
    except ValueError:
        raise InvalidScopeError(f"Unknown scope: {value!r}") from None


def parse_rule(value) -> Rule:
    try:
        return Rule(value)
    except ValueError:
        raise InvalidRuleError(f"Unknown rule: {value!r}") from None


def parse_decision(value) -> ExceptionDecision:
    try:
        return ExceptionDecision(value)
    except ValueError:
        raise InvalidDecisionError(f"Unknown decision: {value!r}") from None


# --------------------------------------------------
# READS
# --------------------------------------------------
def get_effective_rule(db: Session, owner_id: str, scope) -> Rule:
    """
    The rule in force for (owner, scope).

    This is the only place the missing-row default is applied; every
    reader goes through here.
    """
    scope = parse_scope(scope)
    row = (
        db.query(PrivacyRule)
        .filter(PrivacyRule.owner_id == owner_id, PrivacyRule.scope == scope.value)
        .first()
    )
    if row is None:
        return DEFAULT_RULE
    return Rule(row.rule)


def get_exception(
    db: Session, owner_id: str, scope, viewer_id: str
) -> Optional[ExceptionDecision]:
    scope = parse_scope(scope)
    row = (
        db.query(PrivacyException)
        .filter(
            PrivacyException.owner_id == owner_id,
            PrivacyException.scope == scope.value,
            PrivacyException.viewer_id == viewer_id,
        )
        .first()
    )
    return ExceptionDecision(row.decision) if row else None


def list_privacy_settings(db: Session, owner_id: str) -> Dict[str, str]:
    """Every scope mapped to its effective rule, defaults filled in."""
    rows = db.query(PrivacyRule).filter(PrivacyRule.owner_id == owner_id).all()
    configured = {r.scope: r.rule for r in rows}
    return {
        scope.value: configured.get(scope.value, DEFAULT_RULE.value)
        for scope in Scope
    }


def list_privacy_exceptions(
    db: Session, owner_id: str, scope=None
) -> List[PrivacyException]:
    query = db.query(PrivacyException).filter(PrivacyException.owner_id == owner_id)
    if scope is not None:
        query = query.filter(PrivacyException.scope == parse_scope(scope).value)
    return query.order_by(PrivacyException.scope, PrivacyException.viewer_id).all()


# --------------------------------------------------
# WRITES
# --------------------------------------------------
def set_privacy_rule(db: Session, owner_id: str, scope, rule) -> PrivacyRule:
    owner_id = validate_id(owner_id, "owner_id")
    scope = parse_scope(scope)
    rule = parse_rule(rule)

    with atomic(db, "set_privacy_rule"):
        lock_accounts(db, owner_id)

        row = (
            db.query(PrivacyRule)
            .filter_by(owner_id=owner_id, scope=scope.value)
            .first()
        )
        if row:
            row.rule = rule.value
        else:
            row = PrivacyRule(owner_id=owner_id, scope=scope.value, rule=rule.value)
            db.add(row)
        db.flush()

    db.refresh(row)
    logger.info(format_operation(
        "set_privacy_rule", owner=owner_id, scope=scope.value, rule=rule.value
    ))
    return row


def set_privacy_exception(
    db: Session, owner_id: str, scope, viewer_id: str, decision
) -> PrivacyException:
    """
    Allow or deny one viewer. Stored regardless of the current rule but
    only consulted while the rule is ``custom``.
    """
    owner_id = validate_id(owner_id, "owner_id")
    viewer_id = validate_id(viewer_id, "viewer_id")
    scope = parse_scope(scope)
    decision = parse_decision(decision)

    if owner_id == viewer_id:
        raise SelfReferenceError("Owners always see their own content")

    with atomic(db, "set_privacy_exception"):
        lock_accounts(db, owner_id, viewer_id)

        row = (
            db.query(PrivacyException)
            .filter_by(owner_id=owner_id, scope=scope.value, viewer_id=viewer_id)
            .first()
        )
        if row:
            row.decision = decision.value
        else:
            row = PrivacyException(
                owner_id=owner_id,
                scope=scope.value,
                viewer_id=viewer_id,
                decision=decision.value,
            )
            db.add(row)
        db.flush()

    db.refresh(row)
    logger.info(format_operation(
        "set_privacy_exception",
        owner=owner_id, scope=scope.value, viewer=viewer_id, decision=decision.value,
    ))
    return row


def remove_privacy_exception(db: Session, owner_id: str, scope, viewer_id: str) -> bool:
    """Returns False if there was nothing to remove."""
    owner_id = validate_id(owner_id, "owner_id")
    viewer_id = validate_id(viewer_id, "viewer_id")
    scope = parse_scope(scope)

    with atomic(db, "remove_privacy_exception"):
        deleted = (
            db.query(PrivacyException)
            .filter_by(owner_id=owner_id, scope=scope.value, viewer_id=viewer_id)
            .delete(synchronize_session=False)
        )

    logger.info(format_operation(
        "remove_privacy_exception",
        "success" if deleted else "noop",
        owner=owner_id, scope=scope.value, viewer=viewer_id,
    ))
    return bool(deleted)
