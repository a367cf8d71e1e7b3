from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pawsocial.auth.supabase_auth import get_current_account_id
from pawsocial.core import visibility
from pawsocial.core.accounts import require_account
from pawsocial.database import get_db
from pawsocial.schemas.visibility_schema import VisibilityOut
from pawsocial.utils.http_errors import NOT_FOUND_DETAIL, http_errors


router = APIRouter(tags=["Visibility"])


def _to_out(result: visibility.Resolution) -> dict:
    return {
        "allowed": result.allowed,
        "reason": result.reason.value,
        "rule": result.rule.value if result.rule else None,
    }


# --------------------------------------------------
# CAN I SEE THIS SCOPE?
# --------------------------------------------------
@router.get("/visibility/{subject_id}/{scope}", response_model=VisibilityOut)
def get_visibility(
    subject_id: str,
    scope: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        require_account(db, subject_id)
        result = visibility.resolve(db, me, subject_id, scope)

    # Blocked viewers get the same answer as for a missing profile
    if result.conceals_existence:
        raise HTTPException(404, NOT_FOUND_DETAIL)

    return _to_out(result)


# --------------------------------------------------
# MODERATION REVIEW
# --------------------------------------------------
@router.get("/moderation/visibility/{subject_id}/{scope}", response_model=VisibilityOut)
def get_moderation_visibility(
    subject_id: str,
    scope: str,
    override_blocks: bool = False,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        result = visibility.resolve_for_moderation(
            db, me, subject_id, scope, override_blocks=override_blocks
        )
    return _to_out(result)
