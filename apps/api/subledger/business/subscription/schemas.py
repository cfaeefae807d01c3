from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from subledger.core.constants import MAX_DURATION_MONTHS


class SubscribeRequest(BaseModel):
    plan_id: int
    # Zero is accepted here and rejected by the ledger as InsufficientPayment.
    duration_months: int = Field(ge=0, le=MAX_DURATION_MONTHS)


class RenewRequest(BaseModel):
    duration_months: int = Field(ge=0, le=MAX_DURATION_MONTHS)


class SubscribeResult(BaseModel):
    created: bool
    end_date: int
    amount_paid: int


class RenewResult(BaseModel):
    renewed: bool
    new_end_date: int
    amount_paid: int


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subscriber: str
    plan_id: int
    start_date: int
    end_date: int
    active: bool
    auto_renew: bool
    total_paid: int
    payment_count: int
