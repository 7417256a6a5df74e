"""
Kargah Amount Primitive — Decimal Quantities and Money
========================================================
All amounts, costs, hours and stock quantities are ``Decimal``.
Values arriving from JSON or user input go through ``to_amount``
(via ``str`` so floats do not leak binary noise). Snapshot output
goes through ``amount_to_json``: integral values become ``int``.

There is a single currency unit; no currency codes are carried.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Union

ZERO = Decimal(0)

AmountLike = Union[Decimal, int, float, str]


def to_amount(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("Boolean is not a valid amount.")
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {value!r}") from exc


def optional_amount(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return to_amount(value)


def amount_to_json(value: Decimal) -> Union[int, float]:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def sum_amounts(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)
