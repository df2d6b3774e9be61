"""Manager profile endpoints (away status).

- GET  /api/v1/profiles/{role} → Profile for a role
- POST /api/v1/profiles/{role}/away → Toggle the away flag
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from leadhub.schemas.notification import Notification
from leadhub.schemas.profile import AwayToggled, ProfileOut
from leadhub.services.intake import LeadIntakeService, get_intake_service
from leadhub.services.profiles import ProfileUpdateError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{role}", response_model=ProfileOut)
async def get_profile(role: str, service: LeadIntakeService = Depends(get_intake_service)):
    profile = await service.get_profile(role)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post("/{role}/away", response_model=AwayToggled)
async def toggle_away(role: str, service: LeadIntakeService = Depends(get_intake_service)):
    """Flip away/available. While away the chat tells emergencies to expect a callback."""
    try:
        profile = await service.toggle_away(role)
    except ProfileUpdateError:
        raise HTTPException(
            status_code=503,
            detail={"notification": Notification.error("Failed to update away status").model_dump()},
        )

    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    return AwayToggled(
        profile=ProfileOut.model_validate(profile),
        notification=Notification(
            title="Status Updated",
            description=(
                "You are now away - AI will handle visitors" if profile.is_away else "You are now available"
            ),
        ),
    )
