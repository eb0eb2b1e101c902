"""Inbound webhooks from automation tools (Make.com, PhantomBuster) and the
LinkedIn agent.

Thin HTTP layer: lead payload mapping lives in agenthub.services.lead_ingest;
storage lives in the lead_pipeline, instagram_posts and metrics services.
"""

import logging

from fastapi import APIRouter, Request, HTTPException, Depends, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.database import get_db
from agenthub.schemas.instagram_lead import WebhookLeadResponse, LeadOut
from agenthub.schemas.instagram_post import PostCreate, PostOut, WebhookPostResponse
from agenthub.schemas.metric import KpiPayload, MetricOut
from agenthub.services import lead_pipeline, instagram_posts, metrics
from agenthub.services.lead_ingest import ADAPTERS, DEFAULT_SOURCE, MissingUsername, adapt_payload

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/instagram-agent", response_model=WebhookLeadResponse, status_code=status.HTTP_201_CREATED)
async def instagram_agent_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    """Receive a new lead in the generic (Make.com) format."""
    return await _ingest(request, DEFAULT_SOURCE, db)


@router.post("/instagram-agent/{source}", response_model=WebhookLeadResponse, status_code=status.HTTP_201_CREATED)
async def instagram_agent_source_webhook(source: str, request: Request, db: AsyncSession = Depends(get_db)):
    """Receive a new lead from a specific automation source."""
    if source not in ADAPTERS:
        raise HTTPException(status_code=404, detail=f"Unknown webhook source: {source}")
    return await _ingest(request, source, db)


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid webhook data format: body must be JSON")


async def _ingest(request: Request, source: str, db: AsyncSession) -> dict:
    payload = await _read_json(request)

    try:
        lead_data = adapt_payload(payload, source)
    except MissingUsername as e:
        logger.warning("Rejected %s webhook: %s", source, e)
        raise HTTPException(status_code=400, detail=str(e))
    except ValidationError as e:
        logger.warning("Rejected %s webhook: %s", source, e)
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))

    try:
        lead = await lead_pipeline.create_lead(db, lead_data, source=source)
    except Exception as e:
        logger.error("Error processing %s webhook: %s", source, e)
        await db.rollback()
        raise HTTPException(status_code=500, detail="Failed to process Instagram webhook")

    return {
        "message": "Instagram lead created successfully",
        "lead": LeadOut.model_validate(lead),
    }


@router.post("/instagram-post", response_model=WebhookPostResponse, status_code=status.HTTP_201_CREATED)
async def instagram_post_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    """Receive a post whose engagers the agent will mine for leads."""
    payload = await _read_json(request)
    if not isinstance(payload, dict) or not payload.get("postUrl"):
        raise HTTPException(status_code=400, detail="Missing required field: postUrl")

    try:
        post_data = PostCreate.model_validate({**payload, "engagementStats": payload.get("engagementStats") or {}})
    except ValidationError as e:
        logger.warning("Rejected Instagram post webhook: %s", e)
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))

    try:
        post = await instagram_posts.create_post(db, post_data, source="webhook")
    except Exception as e:
        logger.error("Error processing Instagram post webhook: %s", e)
        await db.rollback()
        raise HTTPException(status_code=500, detail="Failed to process Instagram post webhook")

    return {
        "message": "Instagram post received and stored successfully",
        "post": PostOut.model_validate(post),
    }


@router.post("/linkedin-agent/kpi", response_model=MetricOut, status_code=status.HTTP_201_CREATED)
async def linkedin_kpi_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    """Receive the LinkedIn agent's daily invite KPIs."""
    payload = await _read_json(request)
    try:
        kpi = KpiPayload.model_validate(payload)
    except ValidationError as e:
        logger.warning("Rejected LinkedIn KPI webhook: %s", e)
        raise HTTPException(status_code=400, detail=e.errors(include_url=False, include_context=False))

    try:
        return await metrics.record_kpi(db, kpi)
    except Exception as e:
        logger.error("Error processing LinkedIn KPI webhook: %s", e)
        await db.rollback()
        raise HTTPException(status_code=500, detail="Failed to process webhook data")
