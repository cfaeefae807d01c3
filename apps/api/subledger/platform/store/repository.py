from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session


class BaseRepository:
    model: type[Any]
    order_by: str = "id"

    def get(self, session: Session, key: Any) -> Any | None:
        return session.get(self.model, key)

    def add(self, session: Session, row: Any) -> Any:
        session.add(row)
        return row

    def list_by(self, session: Session, **filters: Any) -> list[Any]:
        stmt = select(self.model).filter_by(**filters).order_by(getattr(self.model, self.order_by).asc())
        return list(session.scalars(stmt).all())
