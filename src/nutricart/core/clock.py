"""Default clock and identifier collaborators."""

from __future__ import annotations

import time
from uuid import uuid4


class SystemClock:
    """Wall clock in integer milliseconds since the epoch."""

    def now(self) -> int:
        return int(time.time() * 1000)


class FixedClock:
    """Clock pinned to a given instant; used by tests and `--now`."""

    def __init__(self, value: int) -> None:
        self.value = value

    def now(self) -> int:
        return self.value

    def advance(self, ms: int) -> None:
        self.value += ms


class UuidSupplier:
    """Short random identifiers, unique among live entities in practice."""

    def __init__(self, length: int = 12) -> None:
        self.length = length

    def next_id(self) -> str:
        return uuid4().hex[: self.length]
