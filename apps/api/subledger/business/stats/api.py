from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from subledger.api.dependencies import get_call_context
from subledger.business.stats.schemas import RevenueStatsRead
from subledger.business.stats.service import revenue_stats
from subledger.core.database import get_db
from subledger.platform.security.context import CallContext


router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=RevenueStatsRead)
def get_stats(
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> RevenueStatsRead:
    return revenue_stats.snapshot(db)
