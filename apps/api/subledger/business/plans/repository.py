from __future__ import annotations

from subledger.business.plans.models import Plan
from subledger.platform.store.repository import BaseRepository


class PlanRepository(BaseRepository):
    model = Plan
