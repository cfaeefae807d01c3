from subledger.business.admin.schemas import BulkOperation, BulkRequest, BulkResult

__all__ = [
    "BulkOperation",
    "BulkRequest",
    "BulkResult",
]
