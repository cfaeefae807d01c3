from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    """Logical time source, sampled once per ledger call."""

    def now(self) -> int:
        ...


class SystemClock:
    def now(self) -> int:
        return int(time.time())


@dataclass(slots=True)
class FixedClock:
    current: int = 0

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> int:
        self.current += seconds
        return self.current


_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock
