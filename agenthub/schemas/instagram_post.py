"""Pydantic schemas for Instagram posts."""

from datetime import datetime
from typing import Any, Optional
from pydantic import AliasGenerator, BaseModel, Field
from pydantic.alias_generators import to_camel


class PostCreate(BaseModel):
    post_url: str = Field(min_length=1, max_length=500)
    post_description: Optional[str] = None
    engagement_stats: dict[str, Any] = {}

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PostOut(BaseModel):
    id: int
    post_url: str
    post_description: Optional[str] = None
    engagement_stats: dict[str, Any] = {}
    post_date: datetime
    added_to_warm_leads: bool = False
    added_to_warm_leads_date: Optional[datetime] = None

    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)


class EngagementUpdate(BaseModel):
    engagement_stats: dict[str, Any]

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MarkAddedRequest(BaseModel):
    """Posts whose engagers were pushed into the warm lead queue."""
    post_ids: list[int] = Field(min_length=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MarkAddedResponse(BaseModel):
    message: str
    updated_count: int

    class Config:
        alias_generator = AliasGenerator(serialization_alias=to_camel)


class SamplePostsResponse(BaseModel):
    message: str
    posts: list[PostOut]


class WebhookPostResponse(BaseModel):
    message: str
    post: PostOut
