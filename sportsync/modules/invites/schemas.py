from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class InviteResponse(BaseModel):
    id: int
    token: str
    created_at: Optional[datetime] = None


class InviteTokenResponse(BaseModel):
    token: Optional[str] = None


class IssuedInviteResponse(BaseModel):
    token: str
    invite_url: str
