from __future__ import annotations

from pydantic import BaseModel


class RevenueStatsRead(BaseModel):
    total_revenue: int
    active_subscribers: int
