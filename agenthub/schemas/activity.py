"""Pydantic schemas for the activity feed."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class ActivityOut(BaseModel):
    id: int
    timestamp: datetime
    type: str
    message: str
    metadata: Optional[dict[str, Any]] = Field(None, validation_alias="details")

    class Config:
        from_attributes = True
