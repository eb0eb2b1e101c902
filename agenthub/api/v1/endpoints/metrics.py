"""LinkedIn agent KPI metrics.

- GET /metrics → All snapshots, newest first
- GET /metrics/range?startDate=&endDate= → Snapshots within a date range
- GET /metrics/latest → Most recent snapshot
"""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.database import get_db
from agenthub.schemas.metric import MetricOut
from agenthub.services import metrics as metrics_service

router = APIRouter()

_datetime = TypeAdapter(datetime)


def _parse_date(value: str) -> datetime:
    """ISO date or datetime as naive UTC, matching the stored timestamps."""
    try:
        parsed = _datetime.validate_python(value)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Invalid date format")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@router.get("", response_model=List[MetricOut])
async def list_metrics(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
):
    return await metrics_service.list_metrics(db, limit)


@router.get("/range", response_model=List[MetricOut])
async def metrics_by_date_range(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
):
    if not start_date or not end_date:
        raise HTTPException(status_code=400, detail="Start date and end date are required")
    return await metrics_service.metrics_in_range(db, _parse_date(start_date), _parse_date(end_date))


@router.get("/latest", response_model=MetricOut)
async def latest_metric(db: AsyncSession = Depends(get_db)):
    metric = await metrics_service.latest_metric(db)
    if not metric:
        raise HTTPException(status_code=404, detail="No metrics found")
    return metric
