"""Activity feed service.

Activities are appended alongside the change they describe and committed by
the caller, so a lead mutation and its activity land in one transaction.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.models.activity import Activity, ActivityType

logger = logging.getLogger(__name__)


def record_activity(
    db: AsyncSession,
    type: ActivityType,
    message: str,
    metadata: Optional[dict[str, Any]] = None,
) -> Activity:
    """Stage an activity on the session. Does not commit."""
    activity = Activity(
        timestamp=datetime.utcnow(),
        type=type.value,
        message=message,
        details=metadata,
    )
    db.add(activity)
    return activity


async def list_activities(db: AsyncSession, limit: Optional[int] = None) -> list[Activity]:
    query = select(Activity).order_by(Activity.timestamp.desc(), Activity.id.desc())
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return list(result.scalars().all())


async def count_since(db: AsyncSession, type: ActivityType, since: datetime) -> int:
    result = await db.execute(
        select(func.count(Activity.id)).where(
            Activity.type == type.value,
            Activity.timestamp >= since,
        )
    )
    return result.scalar() or 0
