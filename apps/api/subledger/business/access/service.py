from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from subledger.business.access.repository import AccessEntryRepository
from subledger.business.access.schemas import AccessEntryRead
from subledger.business.subscription.repository import SubscriptionRepository
from subledger.core.constants import PLAN_SERVICES, PREMIUM_SERVICES
from subledger.core.exceptions import NotAuthorized, SubscriptionExpired, SubscriptionNotFound
from subledger.metrics import observe_access_check
from subledger.platform.security.context import CallContext
from subledger.platform.security.owner import OwnerPolicy
from subledger.platform.store.service import LedgerStore


logger = logging.getLogger("subledger.access")


@dataclass(slots=True)
class AccessControlLedger:
    """Per-subscriber, per-service access flags.

    Grants are written without looking at the subscription; validity is only
    enforced on the read path in ``check_service_access``.
    """

    entry_repository: AccessEntryRepository = AccessEntryRepository()
    subscription_repository: SubscriptionRepository = SubscriptionRepository()
    owner_policy: OwnerPolicy = field(default_factory=OwnerPolicy)
    store: LedgerStore = field(default_factory=LedgerStore)

    def grant_plan_services(self, session: Session, subscriber: str, plan_id: int, now: int) -> list[str]:
        # Every plan confers the same bundle; plan_id is accepted but not consulted.
        return self._grant(session, subscriber, PLAN_SERVICES, now)

    def grant_premium_access(self, session: Session, subscriber: str, now: int) -> list[str]:
        return self._grant(session, subscriber, PREMIUM_SERVICES, now)

    def check_service_access(self, session: Session, ctx: CallContext, service_name: str) -> bool:
        with self.store.transaction(session, "check_service_access"):
            subscription = self.subscription_repository.get(session, ctx.caller_id)
            if subscription is None:
                raise SubscriptionNotFound()
            if not subscription.is_valid(ctx.now):
                raise SubscriptionExpired()

            entry = self.entry_repository.get_entry(session, ctx.caller_id, service_name)
            has_access = entry.has_access if entry is not None else False

        observe_access_check(has_access)
        logger.info(
            "access.checked",
            extra={"subscriber": ctx.caller_id, "service_name": service_name, "has_access": has_access},
        )
        return has_access

    def list_entries(self, session: Session, ctx: CallContext, subscriber: str) -> list[AccessEntryRead]:
        if subscriber != ctx.caller_id and not self.owner_policy.is_owner(ctx):
            raise NotAuthorized()
        rows = self.entry_repository.list_by(session, subscriber=subscriber)
        return [AccessEntryRead.model_validate(row) for row in rows]

    def _grant(self, session: Session, subscriber: str, service_names: Iterable[str], now: int) -> list[str]:
        granted: list[str] = []
        for service_name in service_names:
            self.entry_repository.upsert(session, subscriber, service_name, has_access=True, granted_at=now)
            granted.append(service_name)
        # Pending rows are invisible to session.get until flushed.
        session.flush()
        return granted


access_ledger = AccessControlLedger()
