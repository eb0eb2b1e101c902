from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agenthub.core.database import get_db
from agenthub.schemas.activity import ActivityOut
from agenthub.services.activity import list_activities

router = APIRouter()


@router.get("", response_model=List[ActivityOut])
async def get_activities(
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """Recent dashboard activity, newest first."""
    return await list_activities(db, limit)
