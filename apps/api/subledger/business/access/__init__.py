from subledger.business.access.models import AccessEntry
from subledger.business.access.schemas import AccessCheckRead, AccessEntryRead

__all__ = [
    "AccessEntry",
    "AccessCheckRead",
    "AccessEntryRead",
]
