"""Pydantic schemas for Instagram leads.

Responses are emitted in camelCase to match what the dashboard consumes.
"""

from datetime import datetime
from typing import Optional
from pydantic import AliasGenerator, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from agenthub.models.instagram_lead import LeadStatus


def split_tags(value) -> list[str]:
    """Accept a list or a comma-joined string and return a clean list."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, (list, tuple, set)):
        raise ValueError("tags must be a list or a comma-separated string")
    return [str(t).strip() for t in value if str(t).strip()]


class LeadCreate(BaseModel):
    """Schema for manually creating a lead. Status is always warm_lead."""
    username: str = Field(min_length=1, max_length=255)
    full_name: Optional[str] = None
    profile_url: Optional[str] = None
    profile_picture_url: Optional[str] = None
    instagram_id: Optional[str] = Field(None, alias="instagramID")
    is_verified: bool = False
    bio: Optional[str] = None
    followers: Optional[int] = Field(None, ge=0)
    following: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = None
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value):
        return split_tags(value)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LeadOut(BaseModel):
    """Schema for returning a lead."""
    id: int
    username: str
    full_name: Optional[str] = None
    profile_url: Optional[str] = None
    profile_picture_url: Optional[str] = None
    instagram_id: Optional[str] = Field(None, serialization_alias="instagramID")
    is_verified: bool = False
    bio: Optional[str] = None
    followers: Optional[int] = None
    following: Optional[int] = None
    status: LeadStatus
    notes: Optional[str] = None
    tags: list[str] = []
    messages_sent: int = 0
    last_message_at: Optional[datetime] = None
    date_added: datetime
    last_updated: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value):
        return split_tags(value)

    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)


class LeadStatusUpdate(BaseModel):
    """Schema for moving a lead through the pipeline.

    status is a plain string so an unknown value is answered with 400
    rather than a validation error.
    """
    status: str
    notes: Optional[str] = None


class LeadNotesUpdate(BaseModel):
    notes: Optional[str] = None


class LeadCountsOut(BaseModel):
    """Lead tallies for the pipeline tabs and the quota bar."""
    warm_lead_count: int = 0
    message_sent_count: int = 0
    sale_closed_count: int = 0
    total_count: int = 0
    total_messages_sent: int = 0
    daily_messages_sent: int = 0

    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)


class DailyQuotaOut(BaseModel):
    sent: int
    limit: int
    remaining: int
    percentage: int


class WebhookLeadResponse(BaseModel):
    message: str
    lead: LeadOut
