from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


PaymentType = Literal["initial", "renewal"]


class PaymentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subscriber: str
    plan_id: int
    amount: int
    date: int
    payment_type: PaymentType
