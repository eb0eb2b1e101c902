"""Pydantic schemas for webhook schedules."""

from datetime import datetime
from typing import Optional

import httpx
from pydantic import AliasGenerator, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


def check_webhook_url(value: Optional[str]) -> Optional[str]:
    """Reject URLs httpx cannot send to."""
    if value is None:
        return value
    try:
        url = httpx.URL(value.strip())
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid webhook URL: {e}")
    if url.scheme not in ("http", "https") or not url.host:
        raise ValueError("Webhook URL must be an absolute http(s) URL")
    return value.strip()


class ScheduleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    cron_expression: str
    webhook_url: str = Field(min_length=1)
    is_active: bool = True

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, value):
        return check_webhook_url(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ScheduleUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""
    name: Optional[str] = None
    description: Optional[str] = None
    cron_expression: Optional[str] = None
    webhook_url: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, value):
        return check_webhook_url(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ScheduleOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    cron_expression: str
    webhook_url: str
    is_active: bool
    last_run: Optional[datetime] = None
    next_run: Optional[datetime] = None
    run_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)


class ScheduleRunResult(BaseModel):
    schedule_id: int
    success: bool

    class Config:
        alias_generator = AliasGenerator(serialization_alias=to_camel)
