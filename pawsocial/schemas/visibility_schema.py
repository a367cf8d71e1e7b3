from pydantic import BaseModel
from typing import Optional


class VisibilityOut(BaseModel):
    allowed: bool
    reason: str
    rule: Optional[str] = None
