from pydantic import BaseModel
from datetime import datetime


# --------------------------------------------------
# FOLLOW / BLOCK RESULT
# --------------------------------------------------
class RelationshipStatusOut(BaseModel):
    status: str


# --------------------------------------------------
# FOLLOW EDGE
# --------------------------------------------------
class FollowOut(BaseModel):
    follower_id: str
    following_id: str
    created_at: datetime

    class Config:
        from_attributes = True


# --------------------------------------------------
# BLOCK EDGE
# --------------------------------------------------
class BlockOut(BaseModel):
    blocker_id: str
    blocked_id: str
    created_at: datetime

    class Config:
        from_attributes = True
