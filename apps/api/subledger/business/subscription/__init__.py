from subledger.business.subscription.models import Subscription
from subledger.business.subscription.schemas import (
    RenewRequest,
    RenewResult,
    SubscribeRequest,
    SubscribeResult,
    SubscriptionRead,
)

__all__ = [
    "Subscription",
    "SubscribeRequest",
    "SubscribeResult",
    "RenewRequest",
    "RenewResult",
    "SubscriptionRead",
]
