from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func

from pawsocial.database import Base


class ActivityRecord(Base):
    __tablename__ = "activity_feed"

    id = Column(Integer, primary_key=True, index=True)

    # Who performed the action
    actor_id = Column(String, ForeignKey("accounts.id"), nullable=False)

    # Whose activity privacy applies
    subject_id = Column(
        String,
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )

    verb = Column(String, nullable=False)
    object_type = Column(String, nullable=False)
    object_id = Column(String, nullable=True)

    # Frozen at creation; never recomputed
    visibility = Column(String, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_activity_feed_subject_id_id", "subject_id", "id"),
    )


class AppEvent(Base):
    """Audit trail for writes the engine performs on behalf of an account."""

    __tablename__ = "app_events"

    id = Column(Integer, primary_key=True, index=True)
    account_id = Column(String, ForeignKey("accounts.id"), nullable=True)
    event = Column(String, nullable=False, index=True)
    meta = Column(JSON, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
