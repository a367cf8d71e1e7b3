"""
Follow / block transitions.

Every mutation runs in one transaction with both account rows locked, so
the block cascade always sees the edges as they are at commit time and a
partial cascade can never be observed. Nothing here caches: the next
resolver call reads whatever was committed.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from pawsocial.core.accounts import lock_accounts, validate_id
from pawsocial.core.blocking import is_blocked, list_blocked
from pawsocial.core.constants import RelationshipStatus
from pawsocial.core.errors import BlockedError, SelfReferenceError
from pawsocial.core.transactions import atomic
from pawsocial.logging_config import format_operation
from pawsocial.models.block import BlockEdge
from pawsocial.models.follow import FollowEdge


logger = logging.getLogger(__name__)

__all__ = [
    "are_friends",
    "block",
    "follow",
    "follows",
    "is_blocked",
    "list_blocked",
    "list_followers",
    "list_following",
    "unblock",
    "unfollow",
]


def _check_pair(actor_id, target_id, action: str):
    actor_id = validate_id(actor_id, "actor_id")
    target_id = validate_id(target_id, "target_id")
    if actor_id == target_id:
        raise SelfReferenceError(f"Cannot {action} yourself")
    return actor_id, target_id


def _follow_query(db: Session, follower_id: str, following_id: str):
    return db.query(FollowEdge).filter(
        FollowEdge.follower_id == follower_id,
        FollowEdge.following_id == following_id,
    )


def follows(db: Session, follower_id: str, following_id: str) -> bool:
    return _follow_query(db, follower_id, following_id).first() is not None


def are_friends(db: Session, account_a_id: str, account_b_id: str) -> bool:
    """Friends = follow edges in both directions."""
    return follows(db, account_a_id, account_b_id) and follows(
        db, account_b_id, account_a_id
    )


# --------------------------------------------------
# FOLLOW
# --------------------------------------------------
def follow(db: Session, follower_id: str, target_id: str) -> RelationshipStatus:
    follower_id, target_id = _check_pair(follower_id, target_id, "follow")

    with atomic(db, "follow"):
        lock_accounts(db, follower_id, target_id)

        # A block in either direction vetoes the follow
        if is_blocked(db, follower_id, target_id):
            raise BlockedError("Cannot follow this account")

        if _follow_query(db, follower_id, target_id).first():
            status = RelationshipStatus.ALREADY_FOLLOWING
        else:
            db.add(FollowEdge(follower_id=follower_id, following_id=target_id))
            db.flush()
            status = RelationshipStatus.FOLLOWED

    logger.info(format_operation(
        "follow", status.value, follower=follower_id, target=target_id
    ))
    return status


# --------------------------------------------------
# UNFOLLOW
# --------------------------------------------------
def unfollow(db: Session, follower_id: str, target_id: str) -> RelationshipStatus:
    follower_id, target_id = _check_pair(follower_id, target_id, "unfollow")

    with atomic(db, "unfollow"):
        lock_accounts(db, follower_id, target_id)
        deleted = _follow_query(db, follower_id, target_id).delete(
            synchronize_session=False
        )

    status = (
        RelationshipStatus.UNFOLLOWED if deleted
        else RelationshipStatus.NOT_FOLLOWING
    )
    logger.info(format_operation(
        "unfollow", status.value, follower=follower_id, target=target_id
    ))
    return status


# --------------------------------------------------
# BLOCK
# --------------------------------------------------
def block(db: Session, blocker_id: str, target_id: str) -> RelationshipStatus:
    """
    Record BlockEdge(blocker, target) and sever follows in both directions.

    The insert and both deletes commit together or not at all. The cascade
    also runs when the block already exists, so a follow that slipped in
    before this transaction took the locks is still removed.
    """
    blocker_id, target_id = _check_pair(blocker_id, target_id, "block")

    with atomic(db, "block"):
        lock_accounts(db, blocker_id, target_id)

        existing = (
            db.query(BlockEdge)
            .filter_by(blocker_id=blocker_id, blocked_id=target_id)
            .first()
        )
        if existing:
            status = RelationshipStatus.ALREADY_BLOCKED
        else:
            db.add(BlockEdge(blocker_id=blocker_id, blocked_id=target_id))
            status = RelationshipStatus.BLOCKED

        severed = (
            db.query(FollowEdge)
            .filter(
                (
                    (FollowEdge.follower_id == blocker_id)
                    & (FollowEdge.following_id == target_id)
                )
                | (
                    (FollowEdge.follower_id == target_id)
                    & (FollowEdge.following_id == blocker_id)
                )
            )
            .delete(synchronize_session=False)
        )
        db.flush()

    logger.info(format_operation(
        "block", status.value,
        blocker=blocker_id, target=target_id, severed_follows=severed,
    ))
    return status


# --------------------------------------------------
# UNBLOCK
# --------------------------------------------------
def unblock(db: Session, blocker_id: str, target_id: str) -> RelationshipStatus:
    """Remove the block. Follows severed by the block are not restored."""
    blocker_id, target_id = _check_pair(blocker_id, target_id, "unblock")

    with atomic(db, "unblock"):
        lock_accounts(db, blocker_id, target_id)
        deleted = (
            db.query(BlockEdge)
            .filter_by(blocker_id=blocker_id, blocked_id=target_id)
            .delete(synchronize_session=False)
        )

    status = (
        RelationshipStatus.UNBLOCKED if deleted
        else RelationshipStatus.NOT_BLOCKED
    )
    logger.info(format_operation(
        "unblock", status.value, blocker=blocker_id, target=target_id
    ))
    return status


# --------------------------------------------------
# LISTINGS
# --------------------------------------------------
def list_followers(db: Session, account_id: str) -> List[FollowEdge]:
    return (
        db.query(FollowEdge)
        .filter(FollowEdge.following_id == account_id)
        .order_by(FollowEdge.created_at.desc())
        .all()
    )


def list_following(db: Session, account_id: str) -> List[FollowEdge]:
    return (
        db.query(FollowEdge)
        .filter(FollowEdge.follower_id == account_id)
        .order_by(FollowEdge.created_at.desc())
        .all()
    )
