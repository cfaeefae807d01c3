from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class CallContext:
    """Caller identity and the clock reading for one ledger call.

    ``now`` is sampled once when the context is built; every time computation
    inside the call uses it.
    """

    caller_id: str
    now: int
    correlation_id: str | None = None
    roles: tuple[str, ...] = field(default_factory=tuple)
