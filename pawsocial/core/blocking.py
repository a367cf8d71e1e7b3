from typing import List

from sqlalchemy.orm import Session

from pawsocial.models.block import BlockEdge


def is_blocked(
    db: Session,
    account_a_id: str,
    account_b_id: str,
) -> bool:
    """
    Returns True if either account has blocked the other.
    """
    return (
        db.query(BlockEdge)
        .filter(
            (
                (BlockEdge.blocker_id == account_a_id)
                & (BlockEdge.blocked_id == account_b_id)
            )
            | (
                (BlockEdge.blocker_id == account_b_id)
                & (BlockEdge.blocked_id == account_a_id)
            )
        )
        .first()
        is not None
    )


def list_blocked(db: Session, blocker_id: str) -> List[BlockEdge]:
    """Blocks the account has placed, newest first."""
    return (
        db.query(BlockEdge)
        .filter(BlockEdge.blocker_id == blocker_id)
        .order_by(BlockEdge.created_at.desc())
        .all()
    )
