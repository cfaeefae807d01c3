from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from subledger.core.constants import INT64_MAX


class PlanCreate(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    # Non-positive prices are rejected by the registry with InvalidAmount.
    price_per_month: int = Field(le=INT64_MAX)
    max_users: int = Field(ge=0)
    features: str = ""


class PlanRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price_per_month: int
    max_users: int
    features: str
    active: bool
    created_at: int
