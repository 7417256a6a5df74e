"""
Kargah Core Time — Clocks
===========================
Engines and the session ask an injected Clock for the time instead of
reading the system clock, so "today" (default payment dates, the
dashboard) and minted ids are reproducible in tests.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    A clock that only moves when told to.

        clock = FixedClock(datetime(2024, 5, 20, tzinfo=timezone.utc))
        today(clock)          # date(2024, 5, 20)
        clock.advance(86400)  # next day
    """

    def __init__(self, at: datetime) -> None:
        if at.tzinfo is None:
            raise ValueError(f"FixedClock needs an aware datetime, got naive {at!r}.")
        self._at = at

    def now_utc(self) -> datetime:
        return self._at

    def advance(self, seconds: float) -> None:
        self._at += timedelta(seconds=seconds)


def today(clock: Clock) -> date:
    """The calendar day (UTC) the clock is on."""
    return clock.now_utc().date()
