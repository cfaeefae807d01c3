from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from subledger.core.database import Base


class Subscription(Base):
    __tablename__ = "subscriptions"

    subscriber: Mapped[str] = mapped_column(String(128), primary_key=True)
    plan_id: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    end_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    auto_renew: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    total_paid: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
    payment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    def is_valid(self, now: int) -> bool:
        return self.active and self.end_date >= now
