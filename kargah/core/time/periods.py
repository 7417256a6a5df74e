"""
Kargah Core Time — Calendar Days and Report Periods
=====================================================
Records carry calendar dates. Report ranges are inclusive on both
ends: the start bound opens at 00:00:00.000 of its day and the end
bound closes at 23:59:59.999 of its day, so comparing calendar days
is exact. A missing bound is unbounded on that side.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

DayLike = Union[date, datetime, str, None]


def parse_day(value: DayLike) -> Optional[date]:
    """
    Normalise a date-ish value to a calendar day.

    Accepts ``date``, ``datetime`` and ISO strings ('2024-05-15' or
    '2024-05-15T10:00:00'). Empty strings and None mean "no date".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Cannot interpret {value!r} as a date.")
    text = value.strip()
    if not text:
        return None
    if "T" in text or " " in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def require_day(value: DayLike, field_name: str) -> date:
    day = parse_day(value)
    if day is None:
        raise ValueError(f"{field_name} must be a date.")
    return day


# ══════════════════════════════════════════════════════════════
# DATE RANGE
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range. ``None`` on a side means unbounded."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(
                f"start '{self.start.isoformat()}' is after end '{self.end.isoformat()}'."
            )

    @classmethod
    def parse(cls, start: DayLike = None, end: DayLike = None) -> DateRange:
        return cls(start=parse_day(start), end=parse_day(end))

    @classmethod
    def unbounded(cls) -> DateRange:
        return cls()

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, value: DayLike) -> bool:
        if self.is_unbounded:
            return True
        day = parse_day(value)
        if day is None:
            return False
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True
