from pydantic import BaseModel
from typing import Dict
from datetime import datetime


# --------------------------------------------------
# RULES
# --------------------------------------------------
class PrivacyRuleUpdate(BaseModel):
    # Validated by the core so unknown values map to InvalidRuleError
    rule: str


class PrivacyRuleOut(BaseModel):
    owner_id: str
    scope: str
    rule: str
    updated_at: datetime

    class Config:
        from_attributes = True


class PrivacySettingsOut(BaseModel):
    rules: Dict[str, str]


# --------------------------------------------------
# EXCEPTIONS
# --------------------------------------------------
class PrivacyExceptionUpdate(BaseModel):
    decision: str


class PrivacyExceptionOut(BaseModel):
    owner_id: str
    scope: str
    viewer_id: str
    decision: str
    created_at: datetime

    class Config:
        from_attributes = True
