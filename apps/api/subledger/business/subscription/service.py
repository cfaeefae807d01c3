from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from subledger import events
from subledger.business.access.service import AccessControlLedger
from subledger.business.payments.service import PaymentLedger
from subledger.business.plans.service import PlanRegistry
from subledger.business.stats.service import RevenueStats
from subledger.business.subscription.models import Subscription
from subledger.business.subscription.repository import SubscriptionRepository
from subledger.business.subscription.schemas import (
    RenewRequest,
    RenewResult,
    SubscribeRequest,
    SubscribeResult,
    SubscriptionRead,
)
from subledger.core.constants import MIN_SUBSCRIPTION_AMOUNT, SECONDS_PER_MONTH
from subledger.core.exceptions import (
    AlreadySubscribed,
    InsufficientPayment,
    InvalidPlan,
    SubscriptionInactive,
    SubscriptionNotFound,
)
from subledger.metrics import observe_renewal, observe_subscription_created
from subledger.platform.security.context import CallContext
from subledger.platform.store.service import LedgerStore


logger = logging.getLogger("subledger.subscription")


@dataclass(slots=True)
class SubscriptionLedger:
    subscription_repository: SubscriptionRepository = SubscriptionRepository()
    plan_registry: PlanRegistry = field(default_factory=PlanRegistry)
    payment_ledger: PaymentLedger = field(default_factory=PaymentLedger)
    access_ledger: AccessControlLedger = field(default_factory=AccessControlLedger)
    revenue_stats: RevenueStats = field(default_factory=RevenueStats)
    store: LedgerStore = field(default_factory=LedgerStore)

    def subscribe(self, session: Session, ctx: CallContext, payload: SubscribeRequest) -> SubscribeResult:
        with self.store.transaction(session, "subscribe"):
            plan = self.plan_registry.require_plan(session, payload.plan_id)
            if not plan.active:
                raise InvalidPlan()

            cost = plan.price_per_month * payload.duration_months
            if cost < MIN_SUBSCRIPTION_AMOUNT:
                raise InsufficientPayment()
            # One subscription per subscriber for life, expired or not.
            if self.subscription_repository.get(session, ctx.caller_id) is not None:
                raise AlreadySubscribed()

            state = self.store.state(session)
            end_date = ctx.now + payload.duration_months * SECONDS_PER_MONTH
            self.store.require_storable(cost, end_date, state.total_revenue + cost)
            self.subscription_repository.add(
                session,
                Subscription(
                    subscriber=ctx.caller_id,
                    plan_id=plan.id,
                    start_date=ctx.now,
                    end_date=end_date,
                    active=True,
                    auto_renew=False,
                    total_paid=cost,
                    payment_count=1,
                ),
            )
            payment = self.payment_ledger.record(
                session,
                state,
                subscriber=ctx.caller_id,
                plan_id=plan.id,
                amount=cost,
                payment_type="initial",
                now=ctx.now,
            )
            self.access_ledger.grant_plan_services(session, ctx.caller_id, plan.id, ctx.now)
            self.revenue_stats.record_payment(state, cost)
            self.revenue_stats.record_new_subscribers(state, 1)
            plan_id = plan.id
            payment_id = payment.id

        observe_subscription_created(cost)
        logger.info(
            "subscription.created",
            extra={
                "subscriber": ctx.caller_id,
                "plan_id": plan_id,
                "payment_id": payment_id,
                "amount": cost,
                "end_date": end_date,
            },
        )
        events.publish(
            {
                "event_type": "subscription.created",
                "subscriber": ctx.caller_id,
                "plan_id": plan_id,
                "payment_id": payment_id,
                "amount": cost,
                "end_date": end_date,
                "correlation_id": ctx.correlation_id,
            }
        )
        return SubscribeResult(created=True, end_date=end_date, amount_paid=cost)

    def renew(self, session: Session, ctx: CallContext, payload: RenewRequest) -> RenewResult:
        with self.store.transaction(session, "renew"):
            subscription = self.subscription_repository.get(session, ctx.caller_id)
            if subscription is None:
                raise SubscriptionNotFound()
            plan = self.plan_registry.require_plan(session, subscription.plan_id)
            # Only the flag is checked: a lapsed subscription may still renew.
            if not subscription.active:
                raise SubscriptionInactive()

            cost = plan.price_per_month * payload.duration_months
            if cost < MIN_SUBSCRIPTION_AMOUNT:
                raise InsufficientPayment()

            state = self.store.state(session)
            # Extends from the previous end date, so purchased time is additive.
            new_end_date = subscription.end_date + payload.duration_months * SECONDS_PER_MONTH
            self.store.require_storable(
                cost, new_end_date, subscription.total_paid + cost, state.total_revenue + cost
            )
            subscription.end_date = new_end_date
            subscription.total_paid += cost
            subscription.payment_count += 1
            payment = self.payment_ledger.record(
                session,
                state,
                subscriber=ctx.caller_id,
                plan_id=plan.id,
                amount=cost,
                payment_type="renewal",
                now=ctx.now,
            )
            self.revenue_stats.record_payment(state, cost)
            plan_id = plan.id
            payment_id = payment.id

        observe_renewal(cost)
        logger.info(
            "subscription.renewed",
            extra={
                "subscriber": ctx.caller_id,
                "plan_id": plan_id,
                "payment_id": payment_id,
                "amount": cost,
                "end_date": new_end_date,
            },
        )
        events.publish(
            {
                "event_type": "subscription.renewed",
                "subscriber": ctx.caller_id,
                "plan_id": plan_id,
                "payment_id": payment_id,
                "amount": cost,
                "end_date": new_end_date,
                "correlation_id": ctx.correlation_id,
            }
        )
        return RenewResult(renewed=True, new_end_date=new_end_date, amount_paid=cost)

    def get_subscription(self, session: Session, subscriber: str) -> SubscriptionRead:
        subscription = self.subscription_repository.get(session, subscriber)
        if subscription is None:
            raise SubscriptionNotFound()
        return SubscriptionRead.model_validate(subscription)


subscription_ledger = SubscriptionLedger()
