from subledger.platform.security.context import CallContext
from subledger.platform.security.owner import OwnerPolicy

__all__ = [
    "CallContext",
    "OwnerPolicy",
]
