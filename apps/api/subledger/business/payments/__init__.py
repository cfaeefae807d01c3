from subledger.business.payments.models import PaymentRecord
from subledger.business.payments.schemas import PaymentRead, PaymentType

__all__ = [
    "PaymentRecord",
    "PaymentRead",
    "PaymentType",
]
