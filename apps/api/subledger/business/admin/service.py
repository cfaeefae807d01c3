from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from subledger import audit, events
from subledger.business.access.service import AccessControlLedger
from subledger.business.admin.schemas import BulkOperation, BulkResult
from subledger.business.payments.service import PaymentLedger
from subledger.business.plans.models import Plan
from subledger.business.plans.service import PlanRegistry
from subledger.business.stats.service import RevenueStats
from subledger.core.constants import MAX_BULK_SUBSCRIBERS
from subledger.core.exceptions import InvalidAmount, InvalidPlan
from subledger.metrics import observe_bulk_operation, observe_revenue_recorded
from subledger.otel import get_tracer
from subledger.platform.security.context import CallContext
from subledger.platform.security.owner import OwnerPolicy
from subledger.platform.store.service import LedgerStore


logger = logging.getLogger("subledger.admin")
tracer = get_tracer("subledger.admin.bulk")

BulkHandler = Callable[[Session, Plan, Sequence[str], int, int], dict[str, Any]]


@dataclass(slots=True)
class AdminBulkProcessor:
    """Owner-only batch operations over a list of subscribers.

    The batch is validated once as a whole; individual subscribers are never
    rejected. ``bulk-subscribe`` and ``bulk-renew`` only move the aggregate
    counters and the payment-id sequence. They write no subscription, payment
    or access rows, unlike their single-subscriber counterparts.
    ``bulk-grant-access`` writes real access entries.
    """

    owner_policy: OwnerPolicy = field(default_factory=OwnerPolicy)
    plan_registry: PlanRegistry = field(default_factory=PlanRegistry)
    payment_ledger: PaymentLedger = field(default_factory=PaymentLedger)
    access_ledger: AccessControlLedger = field(default_factory=AccessControlLedger)
    revenue_stats: RevenueStats = field(default_factory=RevenueStats)
    store: LedgerStore = field(default_factory=LedgerStore)

    def process_bulk(
        self,
        session: Session,
        ctx: CallContext,
        operation_type: str,
        subscribers: Sequence[str],
        plan_id: int,
        duration_months: int,
    ) -> BulkResult:
        with tracer.start_as_current_span("admin.bulk.process") as span:
            span.set_attribute("admin.bulk.requested_operation", operation_type)
            span.set_attribute("admin.bulk.subscriber_count", len(subscribers))
            if ctx.correlation_id:
                span.set_attribute("correlation_id", ctx.correlation_id)

            with self.store.transaction(session, "process_bulk"):
                self.owner_policy.require_owner(ctx)
                plan = self.plan_registry.require_plan(session, plan_id)
                if not plan.active:
                    raise InvalidPlan()
                if not subscribers:
                    raise InvalidAmount()
                if len(subscribers) > MAX_BULK_SUBSCRIBERS:
                    raise InvalidAmount()
                if duration_months < 0:
                    raise InvalidAmount()

                operation = BulkOperation.resolve(operation_type)
                if operation is None:
                    logger.warning(
                        "admin.bulk.unknown_operation",
                        extra={"caller_id": ctx.caller_id, "requested_operation": operation_type},
                    )
                    operation = BulkOperation.ANALYTICS_REPORT

                cost_per_subscription = plan.price_per_month * duration_months
                handler = self._handlers()[operation]
                outcome = handler(session, plan, subscribers, cost_per_subscription, ctx.now)
                totals = self.revenue_stats.snapshot(session)
                result = BulkResult(
                    operation=operation,
                    requested_operation=operation_type,
                    plan_id=plan.id,
                    plan_name=plan.name,
                    cost_per_subscription=cost_per_subscription,
                    total_subscribers=totals.active_subscribers,
                    total_revenue=totals.total_revenue,
                    **outcome,
                )

            span.set_attribute("admin.bulk.operation", operation.value)
            span.set_attribute("admin.bulk.processed_count", result.processed_count)

        observe_bulk_operation(operation.value, len(subscribers))
        observe_revenue_recorded(operation.value, result.total_revenue_added)
        logger.info(
            "admin.bulk.processed",
            extra={
                "caller_id": ctx.caller_id,
                "operation": operation.value,
                "plan_id": plan_id,
                "subscriber_count": len(subscribers),
                "amount": result.total_revenue_added,
            },
        )
        if operation is not BulkOperation.ANALYTICS_REPORT:
            audit.record(
                ctx.caller_id,
                "admin_bulk",
                str(plan_id),
                operation.value,
                None,
                {"subscribers": list(subscribers), **result.model_dump(mode="json")},
                occurred_at=ctx.now,
                correlation_id=ctx.correlation_id,
            )
        events.publish(
            {
                "event_type": "admin.bulk_processed",
                "operation": operation.value,
                "requested_operation": operation_type,
                "plan_id": plan_id,
                "subscriber_count": len(subscribers),
                "total_revenue_added": result.total_revenue_added,
                "correlation_id": ctx.correlation_id,
            }
        )
        return result

    def _handlers(self) -> dict[BulkOperation, BulkHandler]:
        return {
            BulkOperation.BULK_SUBSCRIBE: self._bulk_subscribe,
            BulkOperation.BULK_RENEW: self._bulk_renew,
            BulkOperation.BULK_GRANT_ACCESS: self._bulk_grant_access,
            BulkOperation.ANALYTICS_REPORT: self._analytics_report,
        }

    def _bulk_subscribe(
        self, session: Session, plan: Plan, subscribers: Sequence[str], cost: int, now: int
    ) -> dict[str, Any]:
        state = self.store.state(session)
        total_cost = cost * len(subscribers)
        self.store.require_storable(total_cost, state.total_revenue + total_cost)
        for _ in subscribers:
            self.payment_ledger.advance_id(state)
        self.revenue_stats.record_payment(state, total_cost)
        self.revenue_stats.record_new_subscribers(state, len(subscribers))
        return {
            "processed_count": len(subscribers),
            "total_revenue_added": total_cost,
            "new_subscriber_count": len(subscribers),
        }

    def _bulk_renew(
        self, session: Session, plan: Plan, subscribers: Sequence[str], cost: int, now: int
    ) -> dict[str, Any]:
        state = self.store.state(session)
        total_cost = cost * len(subscribers)
        self.store.require_storable(total_cost, state.total_revenue + total_cost)
        for _ in subscribers:
            self.payment_ledger.advance_id(state)
        self.revenue_stats.record_payment(state, total_cost)
        return {
            "processed_count": len(subscribers),
            "total_revenue_added": total_cost,
            "renewals_processed": len(subscribers),
        }

    def _bulk_grant_access(
        self, session: Session, plan: Plan, subscribers: Sequence[str], cost: int, now: int
    ) -> dict[str, Any]:
        granted: list[str] = []
        for subscriber in subscribers:
            granted = self.access_ledger.grant_premium_access(session, subscriber, now)
        return {
            "processed_count": len(subscribers),
            "access_grants_processed": len(subscribers),
            "granted_services": granted,
        }

    def _analytics_report(
        self, session: Session, plan: Plan, subscribers: Sequence[str], cost: int, now: int
    ) -> dict[str, Any]:
        return {}


admin_bulk_processor = AdminBulkProcessor()
