"""
Kargah Core Time
==================
Injected clocks, calendar-day ranges and id minting.
"""

from kargah.core.time.clock import Clock, FixedClock, SystemClock, today
from kargah.core.time.ids import ClockIdProvider, IdProvider, SequentialIdProvider
from kargah.core.time.periods import DateRange, parse_day, require_day

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "today",
    "ClockIdProvider",
    "IdProvider",
    "SequentialIdProvider",
    "DateRange",
    "parse_day",
    "require_day",
]
