from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from subledger.core.constants import MAX_BULK_SUBSCRIBERS, MAX_DURATION_MONTHS, MAX_SUBSCRIBER_LENGTH


SubscriberId = Annotated[str, StringConstraints(min_length=1, max_length=MAX_SUBSCRIBER_LENGTH)]


class BulkOperation(StrEnum):
    BULK_SUBSCRIBE = "bulk-subscribe"
    BULK_RENEW = "bulk-renew"
    BULK_GRANT_ACCESS = "bulk-grant-access"
    ANALYTICS_REPORT = "analytics-report"

    @classmethod
    def resolve(cls, raw: str) -> BulkOperation | None:
        try:
            return cls(raw)
        except ValueError:
            return None


class BulkRequest(BaseModel):
    # Kept as a plain string so unknown operations reach the processor.
    operation_type: str
    subscribers: list[SubscriberId] = Field(max_length=MAX_BULK_SUBSCRIBERS)
    plan_id: int
    duration_months: int = Field(ge=0, le=MAX_DURATION_MONTHS)


class BulkResult(BaseModel):
    operation: BulkOperation
    requested_operation: str
    plan_id: int
    plan_name: str
    cost_per_subscription: int
    processed_count: int = 0
    total_revenue_added: int = 0
    new_subscriber_count: int = 0
    renewals_processed: int = 0
    access_grants_processed: int = 0
    granted_services: list[str] = Field(default_factory=list)
    total_subscribers: int
    total_revenue: int
