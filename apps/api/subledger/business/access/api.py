from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from subledger.api.dependencies import get_call_context
from subledger.business.access.schemas import AccessCheckRead, AccessEntryRead
from subledger.business.access.service import access_ledger
from subledger.core.database import get_db
from subledger.platform.security.context import CallContext


router = APIRouter(prefix="/access", tags=["access"])


@router.get("/entries/{subscriber}", response_model=list[AccessEntryRead])
def list_access_entries(
    subscriber: str,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> list[AccessEntryRead]:
    return access_ledger.list_entries(db, ctx, subscriber)


@router.get("/{service_name}", response_model=AccessCheckRead)
def check_service_access(
    service_name: str,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> AccessCheckRead:
    has_access = access_ledger.check_service_access(db, ctx, service_name)
    return AccessCheckRead(service_name=service_name, has_access=has_access)
