from __future__ import annotations

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import Mapped, mapped_column

from subledger.core.database import Base


STATE_ROW_ID = 1


class LedgerState(Base):
    """Process-wide counters; the table holds exactly one row."""

    __tablename__ = "ledger_state"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False, default=STATE_ROW_ID)
    next_plan_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    next_payment_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1, server_default="1")
    total_revenue: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    active_subscribers: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
