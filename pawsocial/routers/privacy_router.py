from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pawsocial.auth.supabase_auth import get_current_account_id
from pawsocial.core import privacy_rules
from pawsocial.database import get_db
from pawsocial.schemas.privacy_schema import (
    PrivacyExceptionOut,
    PrivacyExceptionUpdate,
    PrivacyRuleOut,
    PrivacyRuleUpdate,
    PrivacySettingsOut,
)
from pawsocial.utils.http_errors import http_errors


router = APIRouter(prefix="/privacy", tags=["Privacy"])


# --------------------------------------------------
# MY SETTINGS (defaults filled in)
# --------------------------------------------------
@router.get("", response_model=PrivacySettingsOut)
def get_my_privacy_settings(
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    return {"rules": privacy_rules.list_privacy_settings(db, me)}


# --------------------------------------------------
# SET RULE FOR SCOPE
# --------------------------------------------------
@router.put("/{scope}", response_model=PrivacyRuleOut)
def update_privacy_rule(
    scope: str,
    payload: PrivacyRuleUpdate,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        return privacy_rules.set_privacy_rule(db, me, scope, payload.rule)


# --------------------------------------------------
# CUSTOM EXCEPTIONS
# --------------------------------------------------
@router.get("/{scope}/exceptions", response_model=List[PrivacyExceptionOut])
def get_privacy_exceptions(
    scope: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        return privacy_rules.list_privacy_exceptions(db, me, scope)


@router.put("/{scope}/exceptions/{viewer_id}", response_model=PrivacyExceptionOut)
def update_privacy_exception(
    scope: str,
    viewer_id: str,
    payload: PrivacyExceptionUpdate,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        return privacy_rules.set_privacy_exception(
            db, me, scope, viewer_id, payload.decision
        )


@router.delete("/{scope}/exceptions/{viewer_id}")
def delete_privacy_exception(
    scope: str,
    viewer_id: str,
    db: Session = Depends(get_db),
    me: str = Depends(get_current_account_id),
):
    with http_errors():
        removed = privacy_rules.remove_privacy_exception(db, me, scope, viewer_id)
    return {"status": "removed" if removed else "not_found"}
