from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from subledger.api.dependencies import get_call_context
from subledger.business.plans.schemas import PlanCreate, PlanRead
from subledger.business.plans.service import plan_registry
from subledger.core.database import get_db
from subledger.platform.security.context import CallContext


router = APIRouter(prefix="/plans", tags=["plans"])


@router.post("", response_model=PlanRead, status_code=status.HTTP_201_CREATED)
def create_plan(
    payload: PlanCreate,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> PlanRead:
    return plan_registry.create_plan(db, ctx, payload)


@router.get("", response_model=list[PlanRead])
def list_plans(
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> list[PlanRead]:
    return plan_registry.list_plans(db)


@router.get("/{plan_id}", response_model=PlanRead)
def get_plan(
    plan_id: int,
    db: Session = Depends(get_db),
    ctx: CallContext = Depends(get_call_context),
) -> PlanRead:
    return plan_registry.read_plan(db, plan_id)
