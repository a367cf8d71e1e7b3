from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.sql import func

from pawsocial.database import Base


class FollowEdge(Base):
    """follower_id follows following_id. One row per ordered pair."""

    __tablename__ = "follows"

    follower_id = Column(
        String,
        ForeignKey("accounts.id"),
        primary_key=True,
    )

    following_id = Column(
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
            "follower_id != following_id",
            name="ck_follows_not_self",
        ),
        # Reverse lookup: who follows me
        Index("ix_follows_following", "following_id"),
    )
