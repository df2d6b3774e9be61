"""Lead capture and management endpoints.

- POST /api/v1/leads/ → Submit an intake form
- GET  /api/v1/leads/ → List leads, newest first (optional search)
- GET  /api/v1/leads/stats → Dashboard summary cards
- GET  /api/v1/leads/export.csv → CSV download of the (filtered) list
- GET  /api/v1/leads/export.tsv → Tab-separated text for spreadsheet paste
- GET  /api/v1/leads/{id} → One lead
- PUT  /api/v1/leads/{id} → Update status and notes
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, HTTPException
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from leadhub.core.database import get_db
from leadhub.schemas.lead import LeadCreate, LeadOut, LeadStatsOut, LeadSubmitted, LeadUpdate
from leadhub.schemas.notification import Notification
from leadhub.services import leads as lead_store
from leadhub.services.board import csv_filename, filter_leads, leads_to_csv, leads_to_tsv
from leadhub.services.intake import IntakeFormHandler, LeadForm, LeadIntakeService, get_intake_service
from leadhub.services.leads import LeadWriteError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=LeadSubmitted, status_code=201)
async def submit_lead(
    lead: LeadCreate,
    service: LeadIntakeService = Depends(get_intake_service),
):
    """Capture a lead from a landing page or the chat quick form."""
    form = LeadForm.from_submission(lead)
    handler = IntakeFormHandler(service=service, form=form)
    captured = await handler.submit()

    if captured is None and not handler.notifications:
        raise HTTPException(status_code=422, detail=f"Missing fields: {', '.join(form.missing_fields())}")

    if captured is None:
        raise HTTPException(
            status_code=503,
            detail={
                "notification": handler.notifications[-1].model_dump(),
                "form": form.as_dict(),
            },
        )

    return LeadSubmitted(
        lead=LeadOut.model_validate(captured),
        lead_value=captured.lead_value,
        service_label=captured.service_needed,
        notification=handler.notifications[-1],
    )


@router.get("/", response_model=List[LeadOut])
async def list_leads(
    search: Optional[str] = Query(None, description="Match name, email, service or phone"),
    service: LeadIntakeService = Depends(get_intake_service),
):
    """List leads newest first."""
    return filter_leads(await service.fetch_leads(), search or "")


@router.get("/stats", response_model=LeadStatsOut)
async def lead_stats(db: AsyncSession = Depends(get_db)):
    """Totals for the dashboard summary cards."""
    return await lead_store.lead_stats(db)


@router.get("/export.csv")
async def export_csv(
    search: Optional[str] = Query(None),
    service: LeadIntakeService = Depends(get_intake_service),
):
    leads = filter_leads(await service.fetch_leads(), search or "")
    return Response(
        content=leads_to_csv(leads),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename()}"'},
    )


@router.get("/export.tsv", response_class=PlainTextResponse)
async def export_tsv(
    search: Optional[str] = Query(None),
    service: LeadIntakeService = Depends(get_intake_service),
):
    leads = filter_leads(await service.fetch_leads(), search or "")
    return leads_to_tsv(leads)


@router.get("/{lead_id}", response_model=LeadOut)
async def get_lead(lead_id: UUID, db: AsyncSession = Depends(get_db)):
    lead = await lead_store.get_lead(db, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.put("/{lead_id}", response_model=LeadOut)
async def update_lead(
    lead_id: UUID,
    update: LeadUpdate,
    service: LeadIntakeService = Depends(get_intake_service),
):
    """Update a lead's status and notes. Any status may follow any other."""
    try:
        lead = await service.update_lead(lead_id, update.status, update.notes)
    except LeadWriteError:
        raise HTTPException(
            status_code=503,
            detail={"notification": Notification.error("Failed to update lead").model_dump()},
        )

    if lead is None:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead
