"""Tests for lead submission: dual write, form state and notifications."""

import pytest
from unittest.mock import patch, AsyncMock

import httpx
from sqlalchemy import select, func

from leadhub.models.lead import Lead
from leadhub.schemas.lead import LeadCreate
from leadhub.services.intake import IntakeFormHandler, LeadForm, LeadIntakeService, build_lead_record
from leadhub.services.lead_feed import INSERT, LeadFeed
from leadhub.services.leads import LeadWriteError


def _form(**overrides) -> LeadForm:
    values = dict(
        name="Jane Doe",
        phone="(954) 555-0101",
        email="jane@example.com",
        service_type="Roofing",
        urgency="emergency",
        address="123 Ocean Blvd",
        description="Tarp needed",
    )
    values.update(overrides)
    return LeadForm(**values)


class TestBuildLeadRecord:
    def test_other_service_uses_custom_label(self):
        submission = LeadCreate(
            name="Sam", phone="555", email="sam@example.com",
            service_type="Other", custom_service="Gutter Cleaning",
        )
        record = build_lead_record(submission)
        assert record["service_needed"] == "Gutter Cleaning"
        assert record["lead_value"] == 250
        assert record["status"] == "new"
        assert record["notes"] == ""

    def test_timeline_choice_becomes_urgency(self):
        submission = LeadCreate(
            name="Sam", phone="555", email="sam@example.com",
            service_type="Roofing", urgency="1-week",
        )
        record = build_lead_record(submission)
        assert record["urgency_level"] == "urgent"
        assert record["timeline"] == "Within 1 week"
        assert record["lead_value"] == 450


class TestSubmitLead:
    @pytest.mark.asyncio
    async def test_writes_lead_and_calls_webhook(self, db):
        webhook = AsyncMock(return_value=True)
        feed = LeadFeed()
        events = []

        async def record(message):
            events.append(message)

        feed.subscribe(record)
        service = LeadIntakeService(db, feed=feed, webhook=webhook)

        lead = await service.submit_lead(_form().to_submission())

        assert lead.lead_value == 810
        assert lead.status == "new"
        payload = webhook.await_args.args[0]
        assert payload["full_name"] == "Jane Doe"
        assert isinstance(payload["created_at"], str)
        assert [e["event"] for e in events] == [INSERT]
        assert events[0]["lead"]["id"] == str(lead.id)

    @pytest.mark.asyncio
    async def test_webhook_failure_does_not_fail_submission(self, db):
        webhook = AsyncMock(side_effect=httpx.ConnectError("collector down"))
        service = LeadIntakeService(db, feed=LeadFeed(), webhook=webhook)

        lead = await service.submit_lead(_form().to_submission())

        count = (await db.execute(select(func.count(Lead.id)))).scalar()
        assert lead.id is not None
        assert count == 1

    @pytest.mark.asyncio
    async def test_primary_failure_raises(self, db):
        service = LeadIntakeService(db, feed=LeadFeed(), webhook=AsyncMock(return_value=True))

        with patch("leadhub.services.leads.create_lead", new_callable=AsyncMock) as create:
            create.side_effect = LeadWriteError("database unavailable")
            with pytest.raises(LeadWriteError):
                await service.submit_lead(_form().to_submission())


class TestIntakeFormHandler:
    @pytest.mark.asyncio
    async def test_success_resets_form_and_notifies_once(self, db):
        service = LeadIntakeService(db, feed=LeadFeed(), webhook=AsyncMock(return_value=True))
        handler = IntakeFormHandler(service=service, form=_form())

        lead = await handler.submit()

        assert lead is not None
        assert len(handler.notifications) == 1
        assert handler.notifications[0].title == "🔥 Premium Lead Captured!"
        assert "$810" in handler.notifications[0].description
        assert handler.form.name == ""
        assert handler.form.urgency == "normal"

    @pytest.mark.asyncio
    async def test_chat_source_gets_message_sent_copy(self, db):
        service = LeadIntakeService(db, feed=LeadFeed(), webhook=AsyncMock(return_value=True))
        handler = IntakeFormHandler(service=service, form=_form(source="chat"))

        await handler.submit()

        assert handler.notifications[0].title == "✅ Message Sent!"
        assert handler.form.source == "chat"

    @pytest.mark.asyncio
    async def test_primary_failure_keeps_form(self, db):
        service = LeadIntakeService(db, feed=LeadFeed(), webhook=AsyncMock(return_value=True))
        form = _form()
        handler = IntakeFormHandler(service=service, form=form)

        with patch("leadhub.services.leads.create_lead", new_callable=AsyncMock) as create:
            create.side_effect = LeadWriteError("database unavailable")
            lead = await handler.submit()

        assert lead is None
        assert len(handler.notifications) == 1
        assert handler.notifications[0].variant == "destructive"
        assert handler.notifications[0].description == "Failed to capture lead. Please try again."
        assert form.name == "Jane Doe"
        assert form.service_type == "Roofing"

    @pytest.mark.asyncio
    async def test_incomplete_form_is_not_submitted(self, db):
        service = LeadIntakeService(db, feed=LeadFeed(), webhook=AsyncMock(return_value=True))
        handler = IntakeFormHandler(service=service, form=_form(phone="  "))

        assert await handler.submit() is None
        assert handler.notifications == []
        service.webhook.assert_not_awaited()


def test_form_round_trips_submission():
    form = _form(service_type="Other", custom_service="Gutter Cleaning")
    again = LeadForm.from_submission(form.to_submission())
    assert again.custom_service == "Gutter Cleaning"
    assert again.source == "form"
    assert again.budget == ""


@pytest.mark.asyncio
async def test_away_flag_round_trip(db, manager):
    service = LeadIntakeService(db, feed=LeadFeed(), webhook=AsyncMock(return_value=True))

    assert await service.get_away() is False
    profile = await service.set_away(True)
    assert profile.is_away is True
    assert await service.get_away() is True
    assert await service.set_away(True, role="owner") is None
