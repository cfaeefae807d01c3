from __future__ import annotations

from subledger.business.payments.models import PaymentRecord
from subledger.platform.store.repository import BaseRepository


class PaymentRepository(BaseRepository):
    model = PaymentRecord
