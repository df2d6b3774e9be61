"""Manager profile lookups and the away flag."""

import logging
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.core.config import settings
from leadhub.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileUpdateError(Exception):
    """The away flag could not be saved."""


async def get_profile_by_role(db: AsyncSession, role: str) -> Profile | None:
    """Oldest profile with the given role."""
    result = await db.execute(
        select(Profile).where(Profile.role == role).order_by(Profile.created_at).limit(1)
    )
    return result.scalar_one_or_none()


async def is_away(db: AsyncSession, role: str | None = None) -> bool:
    profile = await get_profile_by_role(db, role or settings.AWAY_PROFILE_ROLE)
    return bool(profile and profile.is_away)


async def set_away(db: AsyncSession, profile: Profile, away: bool) -> Profile:
    profile.is_away = away
    try:
        await db.commit()
        await db.refresh(profile)
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to update away status for %s: %s", profile.email, e)
        raise ProfileUpdateError(str(e)) from e

    logger.info("Profile %s (%s) is now %s", profile.email, profile.role, "away" if away else "available")
    return profile
