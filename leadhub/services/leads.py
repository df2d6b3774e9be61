"""Lead persistence.

Insert, list, update and summary queries against the leads table. Writes are
published on the lead feed once committed.
"""

import logging
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.models.lead import Lead, LeadStatus
from leadhub.schemas.lead import LeadOut
from leadhub.services.lead_feed import LeadFeed, INSERT, UPDATE, lead_feed

logger = logging.getLogger(__name__)


class LeadWriteError(Exception):
    """The database rejected or could not complete a lead write."""


def serialize_lead(lead: Lead) -> dict:
    """JSON-safe dict used for feed events and dashboard snapshots."""
    return LeadOut.model_validate(lead).model_dump(mode="json")


async def create_lead(db: AsyncSession, data: dict, feed: LeadFeed = lead_feed) -> Lead:
    """Insert one lead. Raises LeadWriteError on failure."""
    lead = Lead(**data)
    db.add(lead)
    try:
        await db.commit()
        await db.refresh(lead)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to insert lead for %s: %s", data.get("email"), e)
        raise LeadWriteError(str(e)) from e

    logger.info(
        "Created lead %s: %s (%s) worth $%d",
        lead.id,
        lead.full_name,
        lead.service_needed,
        lead.lead_value,
    )
    await feed.publish(INSERT, serialize_lead(lead))
    return lead


async def list_leads(db: AsyncSession, limit: int | None = None) -> list[Lead]:
    """All leads, newest first."""
    query = select(Lead).order_by(Lead.created_at.desc()).execution_options(populate_existing=True)
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_lead(db: AsyncSession, lead_id: UUID) -> Lead | None:
    result = await db.execute(select(Lead).where(Lead.id == lead_id))
    return result.scalar_one_or_none()


async def update_lead(
    db: AsyncSession,
    lead_id: UUID,
    status: LeadStatus | None,
    notes: str,
    feed: LeadFeed = lead_feed,
) -> Lead | None:
    """Set status and notes on exactly one lead.

    Returns None when the lead does not exist. Last writer wins.
    """
    lead = await get_lead(db, lead_id)
    if not lead:
        return None

    if status is not None:
        lead.status = LeadStatus(status).value
    lead.notes = notes
    try:
        await db.commit()
        await db.refresh(lead)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to update lead %s: %s", lead_id, e)
        raise LeadWriteError(str(e)) from e

    logger.info("Updated lead %s status=%s", lead_id, lead.status)
    await feed.publish(UPDATE, serialize_lead(lead))
    return lead


async def lead_stats(db: AsyncSession) -> dict:
    """Totals for the dashboard summary cards."""
    total = (await db.execute(select(func.count(Lead.id)))).scalar() or 0
    new = (
        await db.execute(select(func.count(Lead.id)).where(Lead.status == LeadStatus.NEW.value))
    ).scalar() or 0
    qualified = (
        await db.execute(select(func.count(Lead.id)).where(Lead.status == LeadStatus.QUALIFIED.value))
    ).scalar() or 0
    total_value = (await db.execute(select(func.sum(Lead.lead_value)))).scalar() or 0

    return {
        "total": total,
        "new": new,
        "qualified": qualified,
        "total_value": int(total_value),
    }
