from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pawsocial.auth.supabase_auth import get_current_account_id
from pawsocial.core import activity
from pawsocial.database import get_db
from pawsocial.schemas.activity_schema import ActivityCreate, ActivityOut
from pawsocial.utils.http_errors import http_errors


router = APIRouter(prefix="/activity", tags=["Activity"])


# --------------------------------------------------
# LOG ACTIVITY
# --------------------------------------------------
@router.post("", response_model=ActivityOut)
def log_activity(
    payload: ActivityCreate,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        return activity.stamp_and_store(
            db,
            subject_id=payload.subject_id or me,
            verb=payload.verb,
            object_type=payload.object_type,
            object_id=payload.object_id,
            requested_visibility=payload.visibility,
            actor_id=me,
        )


# --------------------------------------------------
# ACTIVITY OF AN ACCOUNT (as seen by me)
# --------------------------------------------------
@router.get("/{subject_id}", response_model=List[ActivityOut])
def get_activity(
    subject_id: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        return activity.visible_activity(db, me, subject_id)
