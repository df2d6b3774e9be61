"""Tests for lead capture and dashboard endpoints."""

import csv
import io
import uuid

import httpx
import pytest
from unittest.mock import patch, AsyncMock

from leadhub.main import app
from leadhub.services.intake import LeadIntakeService, get_intake_service
from leadhub.services.leads import LeadWriteError


async def _submit(client, payload):
    response = await client.post("/api/v1/leads/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestSubmitLead:
    @pytest.mark.asyncio
    async def test_submit_returns_value_and_notification(self, client, lead_form):
        data = await _submit(client, lead_form)

        assert data["lead_value"] == 450
        assert data["service_label"] == "Roofing"
        assert data["lead"]["status"] == "new"
        assert data["lead"]["notes"] == ""
        assert data["lead"]["source"] == "form"
        assert data["notification"]["title"] == "🔥 Premium Lead Captured!"

    @pytest.mark.asyncio
    async def test_other_service_label(self, client, lead_form):
        lead_form.update(service_type="Other", custom_service="Gutter Cleaning", urgency="emergency")
        data = await _submit(client, lead_form)

        assert data["service_label"] == "Gutter Cleaning"
        assert data["lead_value"] == 450

    @pytest.mark.asyncio
    async def test_missing_required_field(self, client, lead_form):
        lead_form["phone"] = "   "
        response = await client.post("/api/v1/leads/", json=lead_form)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_webhook_failure_still_captures(self, client, db, lead_form):
        webhook = AsyncMock(side_effect=httpx.ConnectError("collector down"))
        app.dependency_overrides[get_intake_service] = lambda: LeadIntakeService(db, webhook=webhook)
        try:
            data = await _submit(client, lead_form)
        finally:
            del app.dependency_overrides[get_intake_service]

        webhook.assert_awaited_once()
        assert data["lead"]["full_name"] == "Jane Doe"

    @pytest.mark.asyncio
    async def test_primary_failure_returns_form(self, client, lead_form):
        with patch("leadhub.services.leads.create_lead", new_callable=AsyncMock) as create:
            create.side_effect = LeadWriteError("database unavailable")
            response = await client.post("/api/v1/leads/", json=lead_form)

        assert response.status_code == 503
        detail = response.json()["detail"]
        assert detail["notification"]["description"] == "Failed to capture lead. Please try again."
        assert detail["notification"]["variant"] == "destructive"
        assert detail["form"]["name"] == "Jane Doe"
        assert detail["form"]["service_type"] == "Roofing"


class TestListAndUpdate:
    @pytest.mark.asyncio
    async def test_list_newest_first_and_search(self, client, lead_form):
        await _submit(client, lead_form)
        await _submit(client, {**lead_form, "name": "Bob Jones", "email": "bob@example.com",
                               "service_type": "Solar"})

        response = await client.get("/api/v1/leads/")
        assert response.status_code == 200
        assert [l["full_name"] for l in response.json()] == ["Bob Jones", "Jane Doe"]

        response = await client.get("/api/v1/leads/", params={"search": "SOLAR"})
        assert [l["full_name"] for l in response.json()] == ["Bob Jones"]

    @pytest.mark.asyncio
    async def test_update_status_and_notes(self, client, lead_form):
        lead_id = (await _submit(client, lead_form))["lead"]["id"]

        response = await client.put(
            f"/api/v1/leads/{lead_id}", json={"status": "qualified", "notes": "Wants quote Friday"}
        )
        assert response.status_code == 200
        assert response.json()["status"] == "qualified"

        # Any status may follow any other
        response = await client.put(f"/api/v1/leads/{lead_id}", json={"status": "new", "notes": ""})
        assert response.json()["status"] == "new"

        lead = (await client.get(f"/api/v1/leads/{lead_id}")).json()
        assert lead["status"] == "new"
        assert lead["notes"] == ""

    @pytest.mark.asyncio
    async def test_update_unknown_lead(self, client):
        response = await client.put(f"/api/v1/leads/{uuid.uuid4()}", json={"status": "closed"})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_unknown_lead(self, client):
        response = await client.get(f"/api/v1/leads/{uuid.uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_status_rejected(self, client, lead_form):
        lead_id = (await _submit(client, lead_form))["lead"]["id"]
        response = await client.put(f"/api/v1/leads/{lead_id}", json={"status": "archived"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_stats(self, client, lead_form):
        first = await _submit(client, lead_form)
        await _submit(client, {**lead_form, "urgency": "emergency"})
        await client.put(f"/api/v1/leads/{first['lead']['id']}", json={"status": "qualified"})

        stats = (await client.get("/api/v1/leads/stats")).json()
        assert stats == {"total": 2, "new": 1, "qualified": 1, "total_value": 450 + 810}


class TestExport:
    @pytest.mark.asyncio
    async def test_csv_download(self, client, lead_form):
        await _submit(client, {**lead_form, "description": 'Said "hurry", please'})
        await _submit(client, {**lead_form, "name": "Bob Jones"})

        response = await client.get("/api/v1/leads/export.csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="leads-' in response.headers["content-disposition"]
        assert len(response.text.split("\n")) == 3
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0][0] == "Name"
        assert rows[2][7] == 'Said "hurry", please'

    @pytest.mark.asyncio
    async def test_tsv(self, client, lead_form):
        await _submit(client, lead_form)

        response = await client.get("/api/v1/leads/export.tsv")

        assert response.status_code == 200
        lines = response.text.split("\n")
        assert lines[0].startswith("Name\tEmail\tPhone")
        assert lines[1].startswith("Jane Doe\tjane@example.com")
