"""Instagram lead pipeline endpoints.

- GET /instagram-leads → List leads (optional status filter and limit)
- GET /instagram-leads/next-warm → Oldest warm lead for the review queue
- GET /instagram-leads/counts → Per-stage counts and message totals
- GET /instagram-leads/quota → Daily message quota progress
- POST /instagram-leads → Create a lead (always warm_lead)
- POST /instagram-leads/sample → Seed sample leads
- GET /instagram-leads/{id} → Lead detail
- PUT /instagram-leads/{id}/status → Move a lead through the pipeline
- PUT /instagram-leads/{id}/notes → Overwrite notes
- DELETE /instagram-leads/{id} → Remove a lead
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.database import get_db
from agenthub.core.seed import seed_sample_leads
from agenthub.models.instagram_lead import LeadStatus
from agenthub.schemas.instagram_lead import (
    LeadCreate,
    LeadOut,
    LeadStatusUpdate,
    LeadNotesUpdate,
    LeadCountsOut,
    DailyQuotaOut,
)
from agenthub.services import lead_pipeline
from agenthub.services.lead_pipeline import InvalidTransition

router = APIRouter()
logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in LeadStatus]


@router.get("", response_model=List[LeadOut])
async def list_leads(
    status_filter: Optional[LeadStatus] = Query(None, alias="status", description="Filter by pipeline stage"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    """List Instagram leads, newest first."""
    return await lead_pipeline.list_leads(db, status=status_filter, limit=limit)


@router.get("/next-warm", response_model=LeadOut)
async def next_warm_lead(db: AsyncSession = Depends(get_db)):
    """Oldest lead still in warm_lead."""
    lead = await lead_pipeline.get_next_warm_lead(db)
    if not lead:
        raise HTTPException(status_code=404, detail="No warm leads available")
    return lead


@router.get("/counts", response_model=LeadCountsOut)
async def lead_counts(db: AsyncSession = Depends(get_db)):
    return await lead_pipeline.counts_by_status(db)


@router.get("/quota", response_model=DailyQuotaOut)
async def daily_quota(db: AsyncSession = Depends(get_db)):
    return await lead_pipeline.daily_quota(db)


@router.post("", response_model=LeadOut, status_code=status.HTTP_201_CREATED)
async def create_lead(lead: LeadCreate, db: AsyncSession = Depends(get_db)):
    """Create a lead by hand. It always starts as warm_lead."""
    return await lead_pipeline.create_lead(db, lead)


@router.post("/sample", response_model=List[LeadOut], status_code=status.HTTP_201_CREATED)
async def create_sample_leads(db: AsyncSession = Depends(get_db)):
    """Insert the sample lead set (for demos and testing)."""
    return await seed_sample_leads(db)


@router.get("/{lead_id}", response_model=LeadOut)
async def get_lead(lead_id: int, db: AsyncSession = Depends(get_db)):
    lead = await lead_pipeline.get_lead(db, lead_id)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.put("/{lead_id}/status", response_model=LeadOut)
async def update_lead_status(
    lead_id: int,
    status_update: LeadStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Move a lead to another pipeline stage, optionally replacing its notes."""
    new_status = lead_pipeline.parse_status(status_update.status)
    if new_status is None:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid status value. Must be one of: {', '.join(VALID_STATUSES)}"
        )

    try:
        lead = await lead_pipeline.update_status(db, lead_id, new_status, status_update.notes)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))

    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.put("/{lead_id}/notes", response_model=LeadOut)
async def update_lead_notes(
    lead_id: int,
    notes_update: LeadNotesUpdate,
    db: AsyncSession = Depends(get_db),
):
    lead = await lead_pipeline.update_notes(db, lead_id, notes_update.notes)
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


@router.delete("/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lead(lead_id: int, db: AsyncSession = Depends(get_db)):
    """Permanently remove a lead (admin clean-up)."""
    if not await lead_pipeline.delete_lead(db, lead_id):
        raise HTTPException(status_code=404, detail="Lead not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
