"""Seed the service catalog and the manager profile on app startup."""

import logging
from sqlalchemy import select
from leadhub.core.config import settings
from leadhub.core.database import async_session
from leadhub.models.profile import Profile
from leadhub.models.service import Service
from leadhub.services.scoring import SERVICE_BASE_VALUES

logger = logging.getLogger(__name__)


async def seed_defaults():
    """Create catalog entries and a manager profile if they don't exist."""
    async with async_session() as db:
        try:
            existing = set((await db.execute(select(Service.name))).scalars().all())
            missing = [name for name in SERVICE_BASE_VALUES if name not in existing]
            for order, name in enumerate(SERVICE_BASE_VALUES):
                if name in missing:
                    db.add(Service(name=name, active=True, sort_order=order))

            result = await db.execute(
                select(Profile).where(Profile.role == settings.AWAY_PROFILE_ROLE)
            )
            if result.scalars().first() is None:
                db.add(Profile(
                    email=settings.SEED_MANAGER_EMAIL,
                    full_name="Lead Manager",
                    role=settings.AWAY_PROFILE_ROLE,
                    is_away=False,
                ))
                logger.info("Seeded %s profile: %s", settings.AWAY_PROFILE_ROLE, settings.SEED_MANAGER_EMAIL)

            await db.commit()
            if missing:
                logger.info("Seeded %d catalog services", len(missing))

        except Exception as e:
            logger.error("Failed to seed defaults: %s", e)
            await db.rollback()
