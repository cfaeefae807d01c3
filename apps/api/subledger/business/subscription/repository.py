from __future__ import annotations

from subledger.business.subscription.models import Subscription
from subledger.platform.store.repository import BaseRepository


class SubscriptionRepository(BaseRepository):
    model = Subscription
    order_by = "subscriber"
