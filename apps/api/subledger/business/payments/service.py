from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from subledger.business.payments.models import PaymentRecord
from subledger.business.payments.repository import PaymentRepository
from subledger.business.payments.schemas import PaymentRead, PaymentType
from subledger.core.exceptions import NotAuthorized
from subledger.platform.security.context import CallContext
from subledger.platform.security.owner import OwnerPolicy
from subledger.platform.store.models import LedgerState


@dataclass(slots=True)
class PaymentLedger:
    """Append-only payment log keyed by the ``next_payment_id`` counter.

    Writers run inside the caller's transaction and never commit on their own.
    """

    payment_repository: PaymentRepository = PaymentRepository()
    owner_policy: OwnerPolicy = field(default_factory=OwnerPolicy)

    def record(
        self,
        session: Session,
        state: LedgerState,
        *,
        subscriber: str,
        plan_id: int,
        amount: int,
        payment_type: PaymentType,
        now: int,
    ) -> PaymentRecord:
        payment = PaymentRecord(
            id=state.next_payment_id,
            subscriber=subscriber,
            plan_id=plan_id,
            amount=amount,
            date=now,
            payment_type=payment_type,
        )
        self.payment_repository.add(session, payment)
        state.next_payment_id += 1
        return payment

    def advance_id(self, state: LedgerState) -> int:
        reserved = state.next_payment_id
        state.next_payment_id += 1
        return reserved

    def get_payment(self, session: Session, payment_id: int) -> PaymentRecord | None:
        return self.payment_repository.get(session, payment_id)

    def read_payment(self, session: Session, ctx: CallContext, payment_id: int) -> PaymentRead | None:
        payment = self.get_payment(session, payment_id)
        if payment is None:
            return None
        if payment.subscriber != ctx.caller_id and not self.owner_policy.is_owner(ctx):
            raise NotAuthorized()
        return PaymentRead.model_validate(payment)

    def list_payments(self, session: Session, subscriber: str) -> list[PaymentRead]:
        rows = self.payment_repository.list_by(session, subscriber=subscriber)
        return [PaymentRead.model_validate(row) for row in rows]


payment_ledger = PaymentLedger()
