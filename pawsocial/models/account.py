from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from pawsocial.database import Base


class Account(Base):
    """
    Identity unit. Rows are provisioned by the auth platform; this service
    only reads them for existence checks and the moderator role.
    """

    __tablename__ = "accounts"

    # Matches the Supabase auth user id (sub claim)
    id = Column(String, primary_key=True, index=True)

    # user | admin | super_admin
    role = Column(String, nullable=False, default="user")

    display_name = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )