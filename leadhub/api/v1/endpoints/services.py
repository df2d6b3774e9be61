"""Service catalog endpoint used to fill the intake form's service picker."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.core.database import get_db
from leadhub.schemas.service import ServiceOut
from leadhub.services.catalog import list_active_services

router = APIRouter()


@router.get("/", response_model=List[ServiceOut])
async def list_services(db: AsyncSession = Depends(get_db)):
    return await list_active_services(db)
