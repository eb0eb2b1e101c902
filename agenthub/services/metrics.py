"""LinkedIn agent KPI metrics."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.models.activity import ActivityType
from agenthub.models.metric import Metric
from agenthub.schemas.metric import KpiPayload
from agenthub.services.activity import record_activity

logger = logging.getLogger(__name__)


def acceptance_ratio(invites_sent: int, invites_accepted: int) -> float:
    """Accepted invites as a percentage of invites sent."""
    if invites_sent <= 0:
        return 0.0
    return invites_accepted * 100 / invites_sent


async def list_metrics(db: AsyncSession, limit: Optional[int] = None) -> list[Metric]:
    query = select(Metric).order_by(Metric.date.desc(), Metric.id.desc())
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def metrics_in_range(db: AsyncSession, start: datetime, end: datetime) -> list[Metric]:
    """Metrics dated within [start, end], newest first."""
    result = await db.execute(
        select(Metric)
        .where(Metric.date >= start, Metric.date <= end)
        .order_by(Metric.date.desc(), Metric.id.desc())
    )
    return list(result.scalars().all())


async def latest_metric(db: AsyncSession) -> Optional[Metric]:
    metrics = await list_metrics(db, limit=1)
    return metrics[0] if metrics else None


async def record_kpi(db: AsyncSession, payload: KpiPayload, date: Optional[datetime] = None) -> Metric:
    """Store a KPI snapshot and log the refresh to the activity feed."""
    metric = Metric(
        date=date or datetime.utcnow(),
        invites_sent=payload.invites_sent,
        invites_accepted=payload.invites_accepted,
        acceptance_ratio=acceptance_ratio(payload.invites_sent, payload.invites_accepted),
    )
    db.add(metric)
    record_activity(
        db,
        ActivityType.REFRESH,
        "Daily KPI data refreshed via webhook",
        {"invites_sent": payload.invites_sent, "invites_accepted": payload.invites_accepted},
    )
    await db.commit()
    await db.refresh(metric)

    logger.info(
        "Recorded LinkedIn KPIs: %d sent, %d accepted (%.1f%%)",
        metric.invites_sent, metric.invites_accepted, metric.acceptance_ratio,
    )
    return metric
