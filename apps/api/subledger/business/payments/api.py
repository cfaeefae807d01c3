from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from subledger.api.dependencies import get_call_context
from subledger.business.payments.schemas import PaymentRead
from subledger.business.payments.service import payment_ledger
from subledger.core.database import get_db
from subledger.platform.security.context import CallContext


router = APIRouter(prefix="/payments", tags=["payments"])


@router.get("/me", response_model=list[PaymentRead])
def list_my_payments(
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> list[PaymentRead]:
    return payment_ledger.list_payments(db, ctx.caller_id)


@router.get("/{payment_id}", response_model=PaymentRead)
def get_payment(
    payment_id: int,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> PaymentRead:
    payment = payment_ledger.read_payment(db, ctx, payment_id)
    if payment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="payment not found")
    return payment
