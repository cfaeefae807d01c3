from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from subledger.api.dependencies import get_call_context
from subledger.business.subscription.schemas import (
    RenewRequest,
    RenewResult,
    SubscribeRequest,
    SubscribeResult,
    SubscriptionRead,
)
from subledger.business.subscription.service import subscription_ledger
from subledger.core.database import get_db
from subledger.platform.security.context import CallContext


router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post("", response_model=SubscribeResult, status_code=status.HTTP_201_CREATED)
def subscribe(
    payload: SubscribeRequest,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> SubscribeResult:
    return subscription_ledger.subscribe(db, ctx, payload)


@router.post("/renew", response_model=RenewResult)
def renew(
    payload: RenewRequest,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> RenewResult:
    return subscription_ledger.renew(db, ctx, payload)


@router.get("/me", response_model=SubscriptionRead)
def get_my_subscription(
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> SubscriptionRead:
    return subscription_ledger.get_subscription(db, ctx.caller_id)
