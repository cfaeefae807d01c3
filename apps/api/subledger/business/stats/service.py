from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from subledger.business.stats.schemas import RevenueStatsRead
from subledger.platform.store.models import STATE_ROW_ID, LedgerState


@dataclass(slots=True)
class RevenueStats:
    """Running revenue and subscriber totals kept on the ledger state row.

    ``active_subscribers`` only ever grows: nothing in the ledger cancels a
    subscription.
    """

    def record_payment(self, state: LedgerState, amount: int) -> None:
        state.total_revenue += amount

    def record_new_subscribers(self, state: LedgerState, count: int = 1) -> None:
        state.active_subscribers += count

    def snapshot_of(self, state: LedgerState) -> RevenueStatsRead:
        return RevenueStatsRead(total_revenue=state.total_revenue, active_subscribers=state.active_subscribers)

    def snapshot(self, session: Session) -> RevenueStatsRead:
        state = session.get(LedgerState, STATE_ROW_ID)
        if state is None:
            return RevenueStatsRead(total_revenue=0, active_subscribers=0)
        return self.snapshot_of(state)


revenue_stats = RevenueStats()
