from pydantic import BaseModel
from typing import Optional
from datetime import datetime


# --------------------------------------------------
# CREATE ACTIVITY
# --------------------------------------------------
class ActivityCreate(BaseModel):
    subject_id: Optional[str] = None   # defaults to the caller
    verb: str
    object_type: str
    object_id: Optional[str] = None
    visibility: Optional[str] = None


# --------------------------------------------------
# ACTIVITY OUT
# --------------------------------------------------
class ActivityOut(BaseModel):
    id: int
    actor_id: str
    subject_id: str
    verb: str
    object_type: str
    object_id: Optional[str] = None
    visibility: str
    created_at: datetime

    class Config:
        from_attributes = True
