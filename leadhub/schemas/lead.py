"""Pydantic schemas for Leads."""

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from leadhub.models.lead import LeadSource, LeadStatus
from leadhub.schemas.notification import Notification


class LeadCreate(BaseModel):
    """Intake form submission, from a landing page or the chat quick form."""
    name: str
    phone: str
    email: EmailStr
    service_type: str
    urgency: str = "normal"
    address: Optional[str] = None
    budget: Optional[str] = None
    description: Optional[str] = None
    custom_service: Optional[str] = None
    source: LeadSource = LeadSource.FORM

    @field_validator("name", "phone", "service_type", "urgency")
    @classmethod
    def _required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("This field is required")
        return value.strip()


class LeadOut(BaseModel):
    """Schema for returning lead details."""
    id: UUID
    full_name: str
    phone: str
    email: str
    service_needed: str
    project_description: str
    urgency_level: str
    budget: Optional[str] = None
    property_address: Optional[str] = None
    timeline: str
    lead_value: int
    status: LeadStatus
    notes: str
    source: LeadSource
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LeadUpdate(BaseModel):
    """Dashboard edit: new status and notes. Status omitted keeps the current one."""
    status: Optional[LeadStatus] = None
    notes: str = ""


class LeadSubmitted(BaseModel):
    """Successful intake response."""
    lead: LeadOut
    lead_value: int
    service_label: str
    notification: Notification


class LeadStatsOut(BaseModel):
    """Dashboard summary cards."""
    total: int
    new: int
    qualified: int
    total_value: int
