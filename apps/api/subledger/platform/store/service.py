from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from subledger.core.constants import INT64_MAX
from subledger.core.exceptions import InvalidAmount, LedgerError
from subledger.metrics import observe_rejection
from subledger.platform.store.models import STATE_ROW_ID, LedgerState


logger = logging.getLogger("subledger.store")


@dataclass(slots=True)
class LedgerStore:
    """Transactional access to the ledger relations and counters.

    Each public ledger operation runs inside ``transaction``: all reads,
    precondition checks and writes share one session transaction that is
    committed once at the end, or rolled back on the first failure.
    """

    def state(self, session: Session) -> LedgerState:
        state = session.get(LedgerState, STATE_ROW_ID)
        if state is None:
            state = LedgerState(
                id=STATE_ROW_ID,
                next_plan_id=1,
                next_payment_id=1,
                total_revenue=0,
                active_subscribers=0,
            )
            session.add(state)
            session.flush()
        return state

    def require_storable(self, *values: int) -> None:
        """Reject amounts and timestamps that would not fit a BIGINT column."""
        for value in values:
            if not -INT64_MAX <= value <= INT64_MAX:
                raise InvalidAmount()

    @contextmanager
    def transaction(self, session: Session, operation: str) -> Iterator[Session]:
        try:
            yield session
            session.commit()
        except LedgerError as exc:
            session.rollback()
            observe_rejection(operation, exc.name)
            logger.info(
                "ledger.rejected",
                extra={"operation": operation, "error": exc.name, "error_code": exc.code},
            )
            raise
        except Exception:
            session.rollback()
            raise
