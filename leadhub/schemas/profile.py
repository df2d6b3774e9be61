"""Pydantic schemas for manager profiles."""

from uuid import UUID
from typing import Optional
from pydantic import BaseModel
from leadhub.schemas.notification import Notification


class ProfileOut(BaseModel):
    id: UUID
    email: str
    full_name: Optional[str] = None
    role: str
    is_away: bool

    class Config:
        from_attributes = True


class AwayToggled(BaseModel):
    profile: ProfileOut
    notification: Notification

