# pawsocial/models/block.py
from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func

from pawsocial.database import Base


class BlockEdge(Base):
    __tablename__ = "blocks"

    blocker_id = Column(
        String,
        ForeignKey("accounts.id"),
        primary_key=True,
    )

    blocked_id = Column(
        String,
        ForeignKey("accounts.id"),
        primary_key=True,
    )

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "blocker_id != blocked_id",
            name="ck_blocks_not_self",
        ),
        Index("ix_blocks_blocked", "blocked_id"),
    )
