from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from subledger.core.database import Base


class AccessEntry(Base):
    __tablename__ = "access_entries"

    subscriber: Mapped[str] = mapped_column(String(128), primary_key=True)
    service_name: Mapped[str] = mapped_column(String(64), primary_key=True)
    has_access: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    granted_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # Written once at grant time.
    last_accessed: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0, server_default="0")
