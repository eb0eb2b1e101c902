"""Cron-driven webhook scheduler.

Each active ScheduleConfig becomes an APScheduler cron job that POSTs to the
configured automation webhook (e.g. the Make.com scenario that runs the
LinkedIn agent). Runs are logged to the activity feed; a failed call is
recorded, never raised into the scheduler.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.config import settings
from agenthub.core.database import async_session
from agenthub.models.activity import ActivityType
from agenthub.models.schedule_config import ScheduleConfig
from agenthub.services.activity import record_activity

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler(timezone=settings.SCHEDULER_TIMEZONE)

JOB_PREFIX = "schedule-"


class WebhookNotConfigured(Exception):
    pass


def build_trigger(cron_expression: str) -> CronTrigger:
    """Parse a five-field crontab expression. Raises ValueError if invalid."""
    return CronTrigger.from_crontab(cron_expression, timezone=settings.SCHEDULER_TIMEZONE)


def is_valid_cron(cron_expression: str) -> bool:
    try:
        build_trigger(cron_expression)
    except ValueError:
        return False
    return True


def next_fire_time(cron_expression: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Next run as a naive UTC datetime, matching the other timestamp columns."""
    trigger = build_trigger(cron_expression)
    now = now or datetime.now(timezone.utc)
    fire = trigger.get_next_fire_time(None, now)
    if fire is None:
        return None
    return fire.astimezone(timezone.utc).replace(tzinfo=None)


async def post_webhook(url: str, payload: dict[str, Any]) -> httpx.Response:
    async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT_SECONDS) as client:
        response = await client.post(url, json=payload)
        response.raise_for_status()
        return response


async def execute_webhook(schedule_id: int, session_factory=None) -> bool:
    """Scheduler job entry point. Opens its own session."""
    session_factory = session_factory or async_session

    async with session_factory() as db:
        schedule = await db.get(ScheduleConfig, schedule_id)
        if schedule is None:
            logger.warning("Schedule #%d no longer exists, skipping run", schedule_id)
            return False
        return await run_schedule(db, schedule)


async def run_schedule(db: AsyncSession, schedule: ScheduleConfig) -> bool:
    """Run one schedule now. Returns True when the webhook answered 2xx."""
    schedule_id = schedule.id
    logger.info("Executing webhook for schedule #%d - %s", schedule_id, schedule.webhook_url)
    error: Optional[str] = None
    try:
        await post_webhook(schedule.webhook_url, {
            "source": "scheduler",
            "scheduleId": schedule_id,
            "timestamp": datetime.utcnow().isoformat(),
        })
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        error = str(e) or e.__class__.__name__

    schedule.last_run = datetime.utcnow()
    schedule.run_count = (schedule.run_count or 0) + 1
    try:
        schedule.next_run = next_fire_time(schedule.cron_expression)
    except ValueError:
        schedule.next_run = None

    if error is None:
        record_activity(
            db,
            ActivityType.WEBHOOK_SUCCESS,
            f"Webhook executed successfully (schedule #{schedule_id})",
            {"schedule_id": schedule_id},
        )
        logger.info("Webhook execution successful for schedule #%d", schedule_id)
    else:
        record_activity(
            db,
            ActivityType.WEBHOOK_ERROR,
            f"Webhook execution failed (schedule #{schedule_id}): {error}",
            {"schedule_id": schedule_id},
        )
        logger.error("Error executing webhook for schedule #%d: %s", schedule_id, error)

    await db.commit()
    return error is None


def schedule_job(schedule: ScheduleConfig) -> bool:
    """Register (or replace) the cron job for a schedule."""
    if not scheduler.running:
        return False
    stop_job(schedule.id)
    if not schedule.is_active:
        return False
    try:
        trigger = build_trigger(schedule.cron_expression)
    except ValueError:
        logger.error("Invalid cron expression for schedule #%d: %s", schedule.id, schedule.cron_expression)
        return False

    scheduler.add_job(
        execute_webhook,
        trigger,
        args=[schedule.id],
        id=f"{JOB_PREFIX}{schedule.id}",
        replace_existing=True,
    )
    logger.info("Scheduled job for ID #%d with cron: %s", schedule.id, schedule.cron_expression)
    return True


def stop_job(schedule_id: int) -> bool:
    if not scheduler.running:
        return False
    job = scheduler.get_job(f"{JOB_PREFIX}{schedule_id}")
    if job is None:
        return False
    job.remove()
    logger.info("Stopped scheduled job for ID #%d", schedule_id)
    return True


async def ensure_default_schedule(db: AsyncSession) -> Optional[ScheduleConfig]:
    """Create the daily agent schedule on first start when a URL is configured."""
    if not settings.AGENT_WEBHOOK_URL:
        return None
    existing = (await db.execute(select(func.count(ScheduleConfig.id)))).scalar() or 0
    if existing:
        return None

    schedule = ScheduleConfig(
        name="Daily LinkedIn Outreach",
        description="Triggers the LinkedIn agent automation once a day",
        cron_expression=settings.DEFAULT_SCHEDULE_CRON,
        webhook_url=settings.AGENT_WEBHOOK_URL,
        is_active=True,
        next_run=next_fire_time(settings.DEFAULT_SCHEDULE_CRON),
    )
    db.add(schedule)
    await db.commit()
    await db.refresh(schedule)
    logger.info("Created default schedule #%d (%s)", schedule.id, schedule.cron_expression)
    return schedule


async def refresh_schedules(db: AsyncSession) -> int:
    """Drop every schedule job and re-register the active ones."""
    for job in scheduler.get_jobs():
        if job.id.startswith(JOB_PREFIX):
            job.remove()

    result = await db.execute(select(ScheduleConfig).where(ScheduleConfig.is_active.is_(True)))
    active = list(result.scalars().all())
    scheduled = [s.id for s in active if schedule_job(s)]

    record_activity(
        db,
        ActivityType.SYSTEM,
        f"Webhook scheduler initialized with {len(scheduled)} active schedules",
        {"active_schedule_ids": scheduled},
    )
    await db.commit()
    return len(scheduled)


async def start_scheduler() -> None:
    if scheduler.running:
        return
    scheduler.start()
    async with async_session() as db:
        await ensure_default_schedule(db)
        count = await refresh_schedules(db)
    logger.info("Webhook scheduler started with %d active schedules", count)


def shutdown_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)


async def trigger_agent_webhook(db: AsyncSession) -> Any:
    """Fire the configured agent webhook once, outside any schedule."""
    if not settings.AGENT_WEBHOOK_URL:
        raise WebhookNotConfigured("AGENT_WEBHOOK_URL is not configured")

    response = await post_webhook(settings.AGENT_WEBHOOK_URL, {
        "source": "dashboard",
        "timestamp": datetime.utcnow().isoformat(),
    })
    try:
        data = response.json()
    except ValueError:
        data = response.text

    record_activity(db, ActivityType.SYSTEM, "External agent webhook triggered")
    await db.commit()
    logger.info("Agent webhook triggered: %s", settings.AGENT_WEBHOOK_URL)
    return data
