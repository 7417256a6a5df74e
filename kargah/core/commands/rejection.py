"""
Kargah Command Layer — Rejection Model
========================================
Policies answer ``Optional[RejectionReason]``: None lets the command
through, a reason stops it. ``raise_rejection`` (see errors.py) turns
a reason into the matching typed exception.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class RejectionReason:
    """
    Why a workshop command was refused.

    ``code`` is one of ReasonCode, ``policy_name`` names the check that
    fired, and ``details`` carries numbers the caller may want to show
    (shortfalls, balances). Two reasons with the same code, message and
    policy are equal whatever their details.
    """

    code: str
    message: str
    policy_name: str
    details: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        for name in ("code", "message", "policy_name"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"RejectionReason.{name} must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
            "details": dict(self.details),
        }


class ReasonCode:
    """Rejection codes raised by the workshop engines."""

    NOT_FOUND = "NOT_FOUND"                    # entity id unknown
    INVALID_STATE = "INVALID_STATE"            # e.g. delivering a delivered order
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"  # delivery or assembly shortfall
    MISSING_RECIPE = "MISSING_RECIPE"          # assembly part without components
    VALIDATION_FAILED = "VALIDATION_FAILED"
    OVERPAYMENT = "OVERPAYMENT"
    CYCLIC_BOM = "CYCLIC_BOM"
