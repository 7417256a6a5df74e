"""
Kargah Command Layer — Request Field Checks
=============================================
Shared shape checks for request ``__post_init__`` methods.
Each raises ValidationError naming the offending field.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from kargah.core.commands.errors import ValidationError


def require_text(value: Any, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be non-empty.")


def require_id(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer id.")


def require_amount(value: Any, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (Decimal, int)):
        raise ValidationError(f"{field_name} must be a Decimal amount.")
    if isinstance(value, Decimal) and not value.is_finite():
        raise ValidationError(f"{field_name} must be finite.")


def require_positive(value: Any, field_name: str) -> None:
    require_amount(value, field_name)
    if value <= 0:
        raise ValidationError(f"{field_name} must be positive.")


def require_non_negative(value: Any, field_name: str) -> None:
    require_amount(value, field_name)
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative.")


def require_date(value: Any, field_name: str) -> None:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValidationError(f"{field_name} must be a date.")
