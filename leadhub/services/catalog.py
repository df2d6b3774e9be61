"""Service catalog queries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.models.service import Service


async def list_active_services(db: AsyncSession) -> list[Service]:
    result = await db.execute(
        select(Service).where(Service.active.is_(True)).order_by(Service.sort_order, Service.name)
    )
    return list(result.scalars().all())
