"""Webhook schedule management.

- GET /schedules → List schedules
- POST /schedules → Create a schedule
- PUT /schedules/{id} → Update a schedule
- DELETE /schedules/{id} → Delete a schedule
- POST /schedules/{id}/run → Run a schedule now
- POST /trigger-agent-webhook → Fire the default agent webhook once
"""

import logging
from typing import List

import httpx
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.database import get_db
from agenthub.models.schedule_config import ScheduleConfig
from agenthub.schemas.schedule import ScheduleCreate, ScheduleUpdate, ScheduleOut, ScheduleRunResult
from agenthub.services import scheduler as webhook_scheduler

router = APIRouter()
logger = logging.getLogger(__name__)


def _validate_cron(expression: str) -> None:
    if not webhook_scheduler.is_valid_cron(expression):
        raise HTTPException(status_code=400, detail=f"Invalid cron expression: {expression}")


async def _get_schedule_or_404(db: AsyncSession, schedule_id: int) -> ScheduleConfig:
    schedule = await db.get(ScheduleConfig, schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return schedule


@router.get("/schedules", response_model=List[ScheduleOut])
async def list_schedules(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(ScheduleConfig).order_by(ScheduleConfig.id))
    return result.scalars().all()


@router.post("/schedules", response_model=ScheduleOut, status_code=status.HTTP_201_CREATED)
async def create_schedule(payload: ScheduleCreate, db: AsyncSession = Depends(get_db)):
    _validate_cron(payload.cron_expression)

    schedule = ScheduleConfig(
        **payload.model_dump(),
        next_run=webhook_scheduler.next_fire_time(payload.cron_expression),
    )
    db.add(schedule)
    await db.commit()
    await db.refresh(schedule)

    webhook_scheduler.schedule_job(schedule)
    logger.info("Created schedule #%d (%s)", schedule.id, schedule.cron_expression)
    return schedule


@router.put("/schedules/{schedule_id}", response_model=ScheduleOut)
async def update_schedule(schedule_id: int, payload: ScheduleUpdate, db: AsyncSession = Depends(get_db)):
    schedule = await _get_schedule_or_404(db, schedule_id)

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("cron_expression") is not None:
        _validate_cron(changes["cron_expression"])

    for field, value in changes.items():
        if value is not None:
            setattr(schedule, field, value)
    schedule.next_run = webhook_scheduler.next_fire_time(schedule.cron_expression) if schedule.is_active else None

    await db.commit()
    await db.refresh(schedule)

    webhook_scheduler.schedule_job(schedule)
    logger.info("Updated schedule #%d", schedule_id)
    return schedule


@router.delete("/schedules/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(schedule_id: int, db: AsyncSession = Depends(get_db)):
    schedule = await _get_schedule_or_404(db, schedule_id)
    await db.delete(schedule)
    await db.commit()

    webhook_scheduler.stop_job(schedule_id)
    logger.info("Deleted schedule #%d", schedule_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/schedules/{schedule_id}/run", response_model=ScheduleRunResult)
async def run_schedule(schedule_id: int, db: AsyncSession = Depends(get_db)):
    """Execute a schedule immediately, outside its cron timing."""
    schedule = await _get_schedule_or_404(db, schedule_id)
    success = await webhook_scheduler.run_schedule(db, schedule)
    return ScheduleRunResult(schedule_id=schedule_id, success=success)


@router.post("/trigger-agent-webhook")
async def trigger_agent_webhook(db: AsyncSession = Depends(get_db)):
    """Trigger the external agent automation to fetch fresh data."""
    try:
        data = await webhook_scheduler.trigger_agent_webhook(db)
    except webhook_scheduler.WebhookNotConfigured as e:
        raise HTTPException(status_code=503, detail=str(e))
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("Error triggering agent webhook: %s", e)
        raise HTTPException(status_code=502, detail=f"Failed to trigger webhook: {e}")
    return {"success": True, "data": data}
