"""
Kargah Core Time — Identifier Minting
=======================================
Entity ids are opaque numeric tokens minted by the caller context
at creation time. The default provider derives them from the clock
in milliseconds and never hands out the same token twice.
"""

from __future__ import annotations

import uuid
from typing import Protocol

from kargah.core.time.clock import Clock, SystemClock


class IdProvider(Protocol):
    def next_id(self) -> int: ...

    def new_command_id(self) -> uuid.UUID: ...


class ClockIdProvider:
    """Millisecond timestamp ids, bumped forward when the clock stalls."""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()
        self._last = 0

    def next_id(self) -> int:
        candidate = int(self._clock.now_utc().timestamp() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate

    def new_command_id(self) -> uuid.UUID:
        return uuid.uuid4()


class SequentialIdProvider:
    """Deterministic ids for tests and fixtures."""

    def __init__(self, start: int = 1):
        self._next = start
        self._command_counter = 0

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    def new_command_id(self) -> uuid.UUID:
        self._command_counter += 1
        return uuid.uuid5(uuid.NAMESPACE_URL, f"kargah-command:{self._command_counter}")
