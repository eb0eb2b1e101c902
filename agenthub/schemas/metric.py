"""Pydantic schemas for LinkedIn agent KPIs."""

from datetime import datetime
from pydantic import AliasGenerator, BaseModel, Field
from pydantic.alias_generators import to_camel


class KpiPayload(BaseModel):
    """Daily KPI push from the LinkedIn agent automation."""
    invites_sent: int = Field(gt=0)
    invites_accepted: int = Field(ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class MetricOut(BaseModel):
    id: int
    date: datetime
    invites_sent: int
    invites_accepted: int
    acceptance_ratio: float

    class Config:
        from_attributes = True
        alias_generator = AliasGenerator(serialization_alias=to_camel)
