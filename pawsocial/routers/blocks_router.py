# routers/blocks_router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pawsocial.auth.supabase_auth import get_current_account_id
from pawsocial.config import settings
from pawsocial.core import relationships
from pawsocial.core.transactions import with_retries
from pawsocial.database import get_db
from pawsocial.schemas.relationship_schema import BlockOut, RelationshipStatusOut
from pawsocial.utils.http_errors import http_errors


router = APIRouter(prefix="/blocks", tags=["Blocks"])


# --------------------------------------------------
# MY BLOCKED ACCOUNTS
# --------------------------------------------------
@router.get("/mine", response_model=List[BlockOut])
def get_my_blocked_accounts(
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    return relationships.list_blocked(db, me)


# --------------------------------------------------
# BLOCK ACCOUNT
# --------------------------------------------------
@router.post("/{account_id}", response_model=RelationshipStatusOut)
def block_account(
    account_id: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    # Follows in both directions are severed in the same transaction
    with http_errors():
        status = with_retries(
            lambda: relationships.block(db, me, account_id),
            settings.MUTATION_RETRY_ATTEMPTS,
        )
    return {"status": status.value}


# --------------------------------------------------
# UNBLOCK ACCOUNT
# --------------------------------------------------
@router.delete("/{account_id}", response_model=RelationshipStatusOut)
def unblock_account(
    account_id: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        status = with_retries(
            lambda: relationships.unblock(db, me, account_id),
            settings.MUTATION_RETRY_ATTEMPTS,
        )
    return {"status": status.value}
