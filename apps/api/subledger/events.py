from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

from subledger.context import get_correlation_id


EventHandler = Callable[[dict[str, Any]], None]


class LedgerEventBus:
    """Synchronous in-process fan-out of committed ledger events."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        if handler not in self._subscribers[event_type]:
            self._subscribers[event_type].append(handler)

    def dispatch(self, event_type: str, envelope: dict[str, Any]) -> None:
        for handler in list(self._subscribers.get(event_type, [])):
            handler(envelope)


event_bus = LedgerEventBus()
published_events: list[dict[str, Any]] = []


def publish(envelope: dict[str, Any]) -> None:
    if envelope.get("correlation_id") is None:
        envelope["correlation_id"] = get_correlation_id()

    published_events.append(envelope)
    event_type = envelope.get("event_type")
    if isinstance(event_type, str) and event_type:
        event_bus.dispatch(event_type, envelope)
