"""
Activity feed stamping.

The subject's ``activity`` rule is read once when the entry is written and
frozen onto the record. Readers compare against that stamped value, so
tightening the rule later does not hide entries that already exist.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from pawsocial.config import settings
from pawsocial.core.accounts import require_account, validate_id
from pawsocial.core.constants import Rule, Scope
from pawsocial.core.errors import NotFoundError, TransactionConflictError
from pawsocial.core.privacy_rules import get_effective_rule, parse_rule
from pawsocial.core.transactions import atomic
from pawsocial.core.visibility import Resolution, apply_rule, check_relationship_gate
from pawsocial.logging_config import format_operation
from pawsocial.models.activity import ActivityRecord, AppEvent


logger = logging.getLogger(__name__)

# Records fetched per round trip while filtering a feed
FEED_BATCH_SIZE = 100


def stamp_and_store(
    db: Session,
    subject_id: str,
    verb: str,
    object_type: str,
    object_id: Optional[str] = None,
    requested_visibility=None,
    actor_id: Optional[str] = None,
) -> ActivityRecord:
    """
    Write an activity entry with its visibility fixed at this moment.

    ``requested_visibility`` wins when given; otherwise the subject's
    effective ``activity`` rule is used. The returned record's
    ``visibility`` is what callers should persist alongside their content.
    """
    subject_id = validate_id(subject_id, "subject_id")
    actor_id = validate_id(actor_id or subject_id, "actor_id")
    verb = validate_id(verb, "verb")
    object_type = validate_id(object_type, "object_type")

    try:
        with atomic(db, "stamp_activity"):
            require_account(db, subject_id)
            if actor_id != subject_id:
                require_account(db, actor_id)

            if requested_visibility is not None:
                effective = parse_rule(requested_visibility)
            else:
                effective = get_effective_rule(db, subject_id, Scope.ACTIVITY)

            record = ActivityRecord(
                actor_id=actor_id,
                subject_id=subject_id,
                verb=verb,
                object_type=object_type,
                object_id=object_id,
                visibility=effective.value,
            )
            db.add(record)
            db.add(
                AppEvent(
                    account_id=actor_id,
                    event="activity_log_success",
                    meta={
                        "verb": verb,
                        "object_type": object_type,
                        "visibility": effective.value,
                    },
                )
            )
            db.flush()
    except Exception as exc:
        _record_failure(db, actor_id, verb, object_type, exc)
        raise

    db.refresh(record)
    logger.info(format_operation(
        "stamp_activity",
        subject=subject_id, verb=verb, object_type=object_type,
        visibility=record.visibility,
    ))
    return record


def _record_failure(db: Session, actor_id: str, verb: str, object_type: str, exc: Exception):
    """Audit a failed stamp in its own transaction; the stamp itself is rolled back."""
    logger.error(format_operation(
        "stamp_activity", "error", actor=actor_id, verb=verb, error=type(exc).__name__
    ))

    # The missing account may be the actor, which cannot own the audit row
    account_id = None if isinstance(exc, NotFoundError) else actor_id
    try:
        with atomic(db, "activity_log_error"):
            db.add(
                AppEvent(
                    account_id=account_id,
                    event="activity_log_error",
                    meta={"verb": verb, "object_type": object_type, "error": str(exc)},
                )
            )
    except TransactionConflictError:
        # The original failure is what the caller sees
        logger.error(format_operation("activity_log_error", "error", actor=actor_id))


def can_view_activity(db: Session, viewer_id: str, record: ActivityRecord) -> Resolution:
    """
    Owner and block checks against the record's subject, then the stamped
    visibility in place of the live rule. A stamped ``custom`` value still
    consults the subject's current activity exceptions.
    """
    viewer_id = validate_id(viewer_id, "viewer_id")

    gate = check_relationship_gate(db, viewer_id, record.subject_id)
    if gate is not None:
        return gate

    return apply_rule(
        db, viewer_id, record.subject_id, Scope.ACTIVITY, Rule(record.visibility)
    )


def visible_activity(
    db: Session,
    viewer_id: str,
    subject_id: str,
    limit: Optional[int] = None,
) -> List[ActivityRecord]:
    """
    Newest-first entries of ``subject_id`` that ``viewer_id`` may see, up to
    ``limit`` of them. Filtering happens before the limit is applied, so
    hidden newer entries never crowd out visible older ones.
    """
    viewer_id = validate_id(viewer_id, "viewer_id")
    subject_id = validate_id(subject_id, "subject_id")
    if limit is None:
        limit = settings.ACTIVITY_FEED_LIMIT
    if limit <= 0:
        return []

    gate = check_relationship_gate(db, viewer_id, subject_id)
    if gate is not None and not gate.allowed:
        return []

    visible = []
    before_id = None
    while len(visible) < limit:
        query = db.query(ActivityRecord).filter(ActivityRecord.subject_id == subject_id)
        if before_id is not None:
            query = query.filter(ActivityRecord.id < before_id)
        batch = query.order_by(ActivityRecord.id.desc()).limit(FEED_BATCH_SIZE).all()
        if not batch:
            break

        for record in batch:
            if can_view_activity(db, viewer_id, record).allowed:
                visible.append(record)
                if len(visible) == limit:
                    break
        before_id = batch[-1].id

    return visible
