from __future__ import annotations

from sqlalchemy.orm import Session

from subledger.business.access.models import AccessEntry
from subledger.platform.store.repository import BaseRepository


class AccessEntryRepository(BaseRepository):
    model = AccessEntry
    order_by = "service_name"

    def get_entry(self, session: Session, subscriber: str, service_name: str) -> AccessEntry | None:
        return self.get(session, (subscriber, service_name))

    def upsert(self, session: Session, subscriber: str, service_name: str, *, has_access: bool, granted_at: int) -> AccessEntry:
        entry = self.get_entry(session, subscriber, service_name)
        if entry is None:
            entry = AccessEntry(subscriber=subscriber, service_name=service_name)
            self.add(session, entry)
        entry.has_access = has_access
        entry.granted_at = granted_at
        entry.last_accessed = 0
        return entry
