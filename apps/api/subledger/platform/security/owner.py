from __future__ import annotations

from dataclasses import dataclass

from subledger.core.config import get_settings
from subledger.core.exceptions import NotAuthorized
from subledger.platform.security.context import CallContext


@dataclass(slots=True)
class OwnerPolicy:
    """Restricts privileged operations to the single designated owner."""

    owner_id: str | None = None

    def resolve_owner(self) -> str:
        return self.owner_id if self.owner_id is not None else get_settings().owner_id

    def is_owner(self, ctx: CallContext) -> bool:
        return ctx.caller_id == self.resolve_owner()

    def require_owner(self, ctx: CallContext) -> None:
        if not self.is_owner(ctx):
            raise NotAuthorized()
