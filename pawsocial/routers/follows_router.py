from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pawsocial.auth.supabase_auth import get_current_account_id
from pawsocial.config import settings
from pawsocial.core import relationships
from pawsocial.core.transactions import with_retries
from pawsocial.database import get_db
from pawsocial.schemas.relationship_schema import FollowOut, RelationshipStatusOut
from pawsocial.utils.http_errors import http_errors


router = APIRouter(prefix="/follows", tags=["Follows"])


# --------------------------------------------------
# FOLLOW ACCOUNT
# --------------------------------------------------
@router.post("/{account_id}", response_model=RelationshipStatusOut)
def follow_account(
    account_id: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        status = with_retries(
            lambda: relationships.follow(db, me, account_id),
            settings.MUTATION_RETRY_ATTEMPTS,
        )
    return {"status": status.value}


# --------------------------------------------------
# UNFOLLOW ACCOUNT
# --------------------------------------------------
@router.delete("/{account_id}", response_model=RelationshipStatusOut)
def unfollow_account(
    account_id: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        status = with_retries(
            lambda: relationships.unfollow(db, me, account_id),
            settings.MUTATION_RETRY_ATTEMPTS,
        )
    return {"status": status.value}


# --------------------------------------------------
# MY FOLLOWERS / WHO I FOLLOW
# --------------------------------------------------
@router.get("/followers", response_model=List[FollowOut])
def get_my_followers(
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    return relationships.list_followers(db, me)


@router.get("/following", response_model=List[FollowOut])
def get_my_following(
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    return relationships.list_following(db, me)
