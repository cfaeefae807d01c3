from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from subledger.api.dependencies import get_call_context
from subledger.business.admin.schemas import BulkRequest, BulkResult
from subledger.business.admin.service import admin_bulk_processor
from subledger.core.database import get_db
from subledger.platform.security.context import CallContext


router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/bulk", response_model=BulkResult)
def process_bulk(
    payload: BulkRequest,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> BulkResult:
    return admin_bulk_processor.process_bulk(
        db,
        ctx,
        payload.operation_type,
        payload.subscribers,
        payload.plan_id,
        payload.duration_months,
    )
