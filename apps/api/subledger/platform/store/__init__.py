from subledger.platform.store.models import STATE_ROW_ID, LedgerState
from subledger.platform.store.repository import BaseRepository
from subledger.platform.store.service import LedgerStore

__all__ = [
    "STATE_ROW_ID",
    "LedgerState",
    "BaseRepository",
    "LedgerStore",
]
