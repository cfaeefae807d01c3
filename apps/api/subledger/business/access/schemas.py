from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AccessCheckRead(BaseModel):
    service_name: str
    has_access: bool


class AccessEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    subscriber: str
    service_name: str
    has_access: bool
    granted_at: int
    last_accessed: int
