"""Dashboard view of the leads table.

``LeadBoard`` mirrors the leads newest-first and keeps itself current from
the lead feed. It subscribes before the first fetch, so an insert that
lands while the fetch is in flight is merged in rather than lost.
"""

import csv
import io
import logging
from datetime import date, datetime
from typing import Awaitable, Callable
from uuid import UUID

from leadhub.models.lead import LeadStatus
from leadhub.schemas.notification import Notification
from leadhub.services.lead_feed import INSERT, UPDATE, Subscription

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["Name", "Email", "Phone", "Service", "Urgency", "Status", "Value", "Description", "Created"]

# Oldest notifications are dropped past this many
MAX_NOTIFICATIONS = 50


def filter_leads(leads: list[dict], term: str) -> list[dict]:
    """Match name, email and service case-insensitively; phone as typed."""
    if not term:
        return list(leads)
    needle = term.lower()
    return [
        lead for lead in leads
        if needle in (lead.get("full_name") or "").lower()
        or needle in (lead.get("email") or "").lower()
        or needle in (lead.get("service_needed") or "").lower()
        or term in (lead.get("phone") or "")
    ]


def _created_date(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.date().isoformat() if isinstance(value, datetime) else str(value)


def _export_row(lead: dict) -> list[str]:
    return [
        lead.get("full_name") or "",
        lead.get("email") or "",
        lead.get("phone") or "",
        lead.get("service_needed") or "",
        lead.get("urgency_level") or "normal",
        lead.get("status") or "",
        f"${lead.get('lead_value') or 0}",
        lead.get("project_description") or "",
        _created_date(lead.get("created_at")),
    ]


def leads_to_csv(leads: list[dict]) -> str:
    """Header plus one fully quoted row per lead. Embedded quotes are doubled."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for lead in leads:
        writer.writerow(_export_row(lead))
    return buffer.getvalue().rstrip("\n")


def leads_to_tsv(leads: list[dict]) -> str:
    """Tab-separated rows for pasting into a spreadsheet."""
    rows = [EXPORT_HEADERS] + [_export_row(lead) for lead in leads]
    return "\n".join("\t".join(cell.replace("\t", " ").replace("\n", " ") for cell in row) for row in rows)


def csv_filename(today: date | None = None) -> str:
    return f"leads-{(today or date.today()).isoformat()}.csv"


class LeadBoard:
    def __init__(self, service, on_event: Callable[[dict], Awaitable[None]] | None = None):
        self.service = service
        self.on_event = on_event
        self.leads: list[dict] = []
        self.search = ""
        self.editing: str | None = None
        self.notifications: list[Notification] = []
        self._subscription: Subscription | None = None
        # Leads pushed by the feed while a fetch is in flight, by id
        self._in_flight: dict[str, dict] | None = None

    @property
    def filtered(self) -> list[dict]:
        return filter_leads(self.leads, self.search)

    async def start(self) -> None:
        """Subscribe to the feed, then load the current leads."""
        if self._subscription is None:
            self._subscription = self.service.subscribe_to_leads(self.handle_event)
        await self.refresh()

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def refresh(self) -> None:
        self._in_flight = {}
        try:
            fetched = await self.service.fetch_leads()
        except Exception as e:
            logger.error("Error fetching leads: %s", e)
            self._notify(Notification.error("Failed to load leads"))
            return
        finally:
            pushed_during_fetch, self._in_flight = self._in_flight, None
        self._merge(fetched, pushed_during_fetch)

    def _merge(self, fetched: list[dict], pushed_during_fetch: dict[str, dict]) -> None:
        # A row pushed while the fetch ran is newer than the fetched copy of it
        fetched_ids = {lead["id"] for lead in fetched}
        pushed = [lead for lead in self.leads if lead["id"] not in fetched_ids]
        self.leads = pushed + [pushed_during_fetch.get(lead["id"], lead) for lead in fetched]

    def _notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        del self.notifications[:-MAX_NOTIFICATIONS]

    async def handle_event(self, message: dict) -> None:
        event, lead = message.get("event"), message.get("lead")
        if not lead:
            return
        if self._in_flight is not None:
            self._in_flight[lead["id"]] = lead
        if event == INSERT:
            self.leads = [lead] + [existing for existing in self.leads if existing["id"] != lead["id"]]
            self._notify(Notification(
                title="🎯 New Lead!",
                description=f"{lead.get('full_name')} - {lead.get('service_needed')}",
            ))
        elif event == UPDATE:
            for index, existing in enumerate(self.leads):
                if existing["id"] == lead["id"]:
                    self.leads[index] = lead
                    break
            else:
                self.leads.insert(0, lead)

        if self.on_event is not None:
            await self.on_event(message)

    def edit(self, lead_id: str) -> None:
        self.editing = str(lead_id)

    async def save(self, lead_id: str | UUID, status: LeadStatus | str | None, notes: str) -> bool:
        """Send one update; on success reload everything and close the editor."""
        try:
            updated = await self.service.update_lead(
                UUID(str(lead_id)), LeadStatus(status) if status else None, notes
            )
            if updated is None:
                raise LookupError(f"Lead {lead_id} not found")
        except Exception as e:
            logger.error("Failed to update lead %s: %s", lead_id, e)
            self._notify(Notification.error("Failed to update lead"))
            return False

        self._notify(
            Notification(title="Updated", description="Lead information updated successfully")
        )
        await self.refresh()
        self.editing = None
        return True

    async def toggle_away(self) -> bool | None:
        try:
            profile = await self.service.toggle_away()
        except Exception as e:
            logger.error("Failed to update away status: %s", e)
            self._notify(Notification.error("Failed to update away status"))
            return None
        if profile is None:
            self._notify(Notification.error("Failed to update away status"))
            return None
        self._notify(Notification(
            title="Status Updated",
            description="You are now away - AI will handle visitors" if profile.is_away else "You are now available",
        ))
        return profile.is_away

    def export_csv(self) -> str:
        return leads_to_csv(self.filtered)

    def export_tsv(self) -> str:
        return leads_to_tsv(self.filtered)
