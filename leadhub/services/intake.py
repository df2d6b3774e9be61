"""Lead intake.

``LeadIntakeService`` is the one object pages, the chat widget and the
dashboard talk to: it submits leads, answers chat turns, exposes the live
lead feed and applies dashboard edits. Endpoints receive it through
``get_intake_service`` so tests can swap in a double.

``IntakeFormHandler`` holds the state of one intake form and turns a submit
into exactly one notification: success resets the form, failure keeps it.
"""

import asyncio
import logging
from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from typing import Awaitable, Callable
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.core.config import settings
from leadhub.core.database import get_db
from leadhub.models.lead import Lead, LeadSource, LeadStatus
from leadhub.models.profile import Profile
from leadhub.schemas.lead import LeadCreate
from leadhub.schemas.notification import Notification
from leadhub.services import leads as lead_store
from leadhub.services import profiles
from leadhub.services.chat import ChatReply, ChatResponder, ChatSession
from leadhub.services.lead_feed import LeadEventHandler, LeadFeed, Subscription, lead_feed
from leadhub.services.scoring import (
    calculate_lead_value,
    normalize_urgency,
    resolve_service_label,
    timeline_label,
)
from leadhub.services.webhook import post_lead_webhook

logger = logging.getLogger(__name__)

WebhookSender = Callable[[dict], Awaitable[bool]]


def build_lead_record(submission: LeadCreate) -> dict:
    """Column values for a new lead: label resolved, value and timeline derived."""
    service = resolve_service_label(submission.service_type, submission.custom_service)
    urgency = normalize_urgency(submission.urgency)
    return {
        "full_name": submission.name,
        "phone": submission.phone,
        "email": str(submission.email),
        "service_needed": service,
        "project_description": submission.description or "",
        "urgency_level": urgency.value,
        "budget": submission.budget or None,
        "property_address": submission.address or None,
        "timeline": timeline_label(urgency),
        "lead_value": calculate_lead_value(service, urgency),
        "status": LeadStatus.NEW.value,
        "notes": "",
        "source": LeadSource(submission.source).value,
        "created_at": datetime.utcnow(),
    }


class LeadIntakeService:
    def __init__(
        self,
        db: AsyncSession,
        feed: LeadFeed = lead_feed,
        responder: ChatResponder | None = None,
        webhook: WebhookSender = post_lead_webhook,
    ):
        self.db = db
        self.feed = feed
        self.responder = responder or ChatResponder()
        self.webhook = webhook

    async def submit_lead(self, submission: LeadCreate) -> Lead:
        """Write the lead and, concurrently, send it to the webhook.

        Only the database write decides the outcome; the webhook result is
        logged. Raises LeadWriteError when the write fails.
        """
        record = build_lead_record(submission)
        payload = {**record, "created_at": record["created_at"].isoformat()}

        lead_result, webhook_result = await asyncio.gather(
            lead_store.create_lead(self.db, record, self.feed),
            self.webhook(payload),
            return_exceptions=True,
        )

        if isinstance(webhook_result, BaseException):
            logger.warning("Lead webhook failed for %s: %s", record["email"], webhook_result)

        if isinstance(lead_result, BaseException):
            raise lead_result
        return lead_result

    async def get_chat_reply(self, session: ChatSession, utterance: str) -> ChatReply:
        away = await self.get_away()
        return await self.responder.reply(session, utterance, away=away)

    def subscribe_to_leads(self, handler: LeadEventHandler) -> Subscription:
        return self.feed.subscribe(handler)

    async def fetch_leads(self) -> list[dict]:
        return [lead_store.serialize_lead(lead) for lead in await lead_store.list_leads(self.db)]

    async def update_lead(self, lead_id: UUID, status: LeadStatus | None, notes: str) -> dict | None:
        lead = await lead_store.update_lead(self.db, lead_id, status, notes, self.feed)
        return lead_store.serialize_lead(lead) if lead else None

    async def get_profile(self, role: str | None = None) -> Profile | None:
        return await profiles.get_profile_by_role(self.db, role or settings.AWAY_PROFILE_ROLE)

    async def get_away(self, role: str | None = None) -> bool:
        return await profiles.is_away(self.db, role)

    async def set_away(self, away: bool, role: str | None = None) -> Profile | None:
        profile = await self.get_profile(role)
        if profile is None:
            return None
        return await profiles.set_away(self.db, profile, away)

    async def toggle_away(self, role: str | None = None) -> Profile | None:
        """Flip the away flag on the profile for ``role``. None if there is no such profile."""
        profile = await self.get_profile(role)
        if profile is None:
            return None
        return await profiles.set_away(self.db, profile, not profile.is_away)


async def get_intake_service(db: AsyncSession = Depends(get_db)) -> LeadIntakeService:
    return LeadIntakeService(db)


@dataclass
class LeadForm:
    """Field values of one intake form, as the visitor typed them."""
    name: str = ""
    phone: str = ""
    email: str = ""
    service_type: str = ""
    urgency: str = "normal"
    address: str = ""
    budget: str = ""
    description: str = ""
    custom_service: str = ""
    source: str = LeadSource.FORM.value

    REQUIRED = ("name", "phone", "email", "service_type", "urgency")

    @classmethod
    def from_submission(cls, submission: LeadCreate) -> "LeadForm":
        values = submission.model_dump(mode="json")
        return cls(**{
            f.name: str(values.get(f.name) or getattr(cls, f.name))
            for f in fields(cls)
        })

    def missing_fields(self) -> list[str]:
        return [name for name in self.REQUIRED if not getattr(self, name).strip()]

    def reset(self) -> None:
        source = self.source
        for f in fields(self):
            setattr(self, f.name, f.default)
        self.source = source

    def as_dict(self) -> dict:
        return asdict(self)

    def to_submission(self) -> LeadCreate:
        return LeadCreate(**{k: v for k, v in self.as_dict().items() if v != ""})


def success_notification(lead: Lead) -> Notification:
    if lead.source == LeadSource.CHAT.value:
        return Notification(
            title="✅ Message Sent!",
            description=(
                f"Your {lead.service_needed} request (worth ${lead.lead_value}) is on its way. "
                "We'll contact you within 30 minutes with contractor matches!"
            ),
        )
    return Notification(
        title="🔥 Premium Lead Captured!",
        description=(
            f"High-value {lead.service_needed} lead worth ${lead.lead_value} secured. "
            "Contractors will contact you within hours!"
        ),
    )


@dataclass
class IntakeFormHandler:
    service: LeadIntakeService
    form: LeadForm
    notifications: list[Notification] = field(default_factory=list)

    async def submit(self) -> Lead | None:
        """Submit the form once. No automatic retry."""
        if self.form.missing_fields():
            logger.debug("Intake form incomplete: %s", self.form.missing_fields())
            return None

        try:
            lead = await self.service.submit_lead(self.form.to_submission())
        except Exception as e:
            logger.error("Error capturing lead for %s: %s", self.form.email, e)
            self.notifications.append(
                Notification.error("Failed to capture lead. Please try again.")
            )
            return None

        self.notifications.append(success_notification(lead))
        self.form.reset()
        return lead
