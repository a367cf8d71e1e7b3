from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from pawsocial.database import Base


class PrivacyRule(Base):
    """
    One row per (owner, scope). No row means the owner never changed the
    setting and the resolver falls back to the default rule.
    """

    __tablename__ = "privacy_rules"

    owner_id = Column(
        String,
        ForeignKey("accounts.id"),
        primary_key=True,
    )

    # profile | posts | pets | photos | reels | activity
    scope = Column(String, primary_key=True)

    # public | followers | friends | private | custom
    rule = Column(String, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class PrivacyException(Base):
    """
    Per-viewer override, only consulted while the owner's rule for the
    scope is ``custom``.
    """

    __tablename__ = "privacy_exceptions"

    owner_id = Column(
        String,
        ForeignKey("accounts.id"),
        primary_key=True,
    )

    scope = Column(String, primary_key=True)

    viewer_id = Column(
        String,
        ForeignKey("accounts.id"),
        primary_key=True,
    )

    # allow | deny
    decision = Column(String, nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
