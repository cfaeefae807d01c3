"""Ledger failure taxonomy.

Every rejected operation raises exactly one of these, identified by its
numeric code. Errors carry no payload beyond the code; the HTTP layer maps
them to a status and a JSON envelope.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base error for a violated ledger precondition."""

    code: int = 0
    status_code: int = 400
    message: str = "ledger operation rejected"

    def __init__(self) -> None:
        super().__init__(f"{self.code} {self.message}")

    @property
    def name(self) -> str:
        return type(self).__name__


class NotAuthorized(LedgerError):
    code = 100
    status_code = 403
    message = "caller is not the owner"


class InvalidPlan(LedgerError):
    code = 101
    status_code = 422
    message = "plan is not active"


class SubscriptionNotFound(LedgerError):
    code = 102
    status_code = 404
    message = "subscription not found"


class SubscriptionExpired(LedgerError):
    code = 103
    status_code = 403
    message = "subscription has expired"


class InsufficientPayment(LedgerError):
    code = 104
    status_code = 422
    message = "payment below minimum subscription amount"


class PlanNotFound(LedgerError):
    code = 105
    status_code = 404
    message = "plan not found"


class AlreadySubscribed(LedgerError):
    code = 106
    status_code = 409
    message = "caller already has a subscription"


class InvalidAmount(LedgerError):
    code = 107
    status_code = 422
    message = "invalid amount"


class SubscriptionInactive(LedgerError):
    code = 108
    status_code = 409
    message = "subscription is not active"


ALL_ERRORS: tuple[type[LedgerError], ...] = (
    NotAuthorized,
    InvalidPlan,
    SubscriptionNotFound,
    SubscriptionExpired,
    InsufficientPayment,
    PlanNotFound,
    AlreadySubscribed,
    InvalidAmount,
    SubscriptionInactive,
)
