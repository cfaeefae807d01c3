from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from subledger import audit, events
from subledger.business.plans.models import Plan
from subledger.business.plans.repository import PlanRepository
from subledger.business.plans.schemas import PlanCreate, PlanRead
from subledger.core.exceptions import InvalidAmount, PlanNotFound
from subledger.metrics import observe_plan_created
from subledger.platform.security.context import CallContext
from subledger.platform.security.owner import OwnerPolicy
from subledger.platform.store.service import LedgerStore


logger = logging.getLogger("subledger.plans")


@dataclass(slots=True)
class PlanRegistry:
    plan_repository: PlanRepository = PlanRepository()
    owner_policy: OwnerPolicy = field(default_factory=OwnerPolicy)
    store: LedgerStore = field(default_factory=LedgerStore)

    def create_plan(self, session: Session, ctx: CallContext, payload: PlanCreate) -> PlanRead:
        with self.store.transaction(session, "create_plan"):
            self.owner_policy.require_owner(ctx)
            if payload.price_per_month <= 0:
                raise InvalidAmount()
            self.store.require_storable(payload.price_per_month)

            state = self.store.state(session)
            plan = Plan(
                id=state.next_plan_id,
                name=payload.name,
                price_per_month=payload.price_per_month,
                max_users=payload.max_users,
                features=payload.features,
                active=True,
                created_at=ctx.now,
            )
            self.plan_repository.add(session, plan)
            state.next_plan_id += 1
            result = PlanRead.model_validate(plan)

        observe_plan_created()
        logger.info("plan.created", extra={"caller_id": ctx.caller_id, "plan_id": result.id})
        audit.record(
            ctx.caller_id,
            "plan",
            str(result.id),
            "create",
            None,
            result.model_dump(),
            occurred_at=ctx.now,
            correlation_id=ctx.correlation_id,
        )
        events.publish(
            {
                "event_type": "plan.created",
                "plan_id": result.id,
                "price_per_month": result.price_per_month,
                "correlation_id": ctx.correlation_id,
            }
        )
        return result

    def get_plan(self, session: Session, plan_id: int) -> Plan | None:
        return self.plan_repository.get(session, plan_id)

    def require_plan(self, session: Session, plan_id: int) -> Plan:
        plan = self.get_plan(session, plan_id)
        if plan is None:
            raise PlanNotFound()
        return plan

    def read_plan(self, session: Session, plan_id: int) -> PlanRead:
        return PlanRead.model_validate(self.require_plan(session, plan_id))

    def list_plans(self, session: Session) -> list[PlanRead]:
        return [PlanRead.model_validate(plan) for plan in self.plan_repository.list_by(session)]


plan_registry = PlanRegistry()
