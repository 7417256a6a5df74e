"""
Kargah Core Config — Admin-Configurable Engine Rules
======================================================
Policies that the engines must not hardcode: how overpayments are
treated, how assembly cost is resolved, how daily wages convert to
an hourly rate, and the reorder threshold for auto-created parts.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional


# ══════════════════════════════════════════════════════════════
# POLICY ENUMS
# ══════════════════════════════════════════════════════════════

class OverpaymentPolicy(Enum):
    ACCEPT = "ACCEPT"  # payment above the remaining balance is recorded as-is
    REJECT = "REJECT"  # payment above the remaining balance is refused


class CostingDiscipline(Enum):
    RECURSIVE = "RECURSIVE"  # assembly cost recomputed from its BOM on every call
    STORED = "STORED"        # assembly cost read from the part's stored cost field


# ══════════════════════════════════════════════════════════════
# ENGINE RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EngineRules:
    overpayment_policy: OverpaymentPolicy = OverpaymentPolicy.ACCEPT
    costing_discipline: CostingDiscipline = CostingDiscipline.RECURSIVE
    hours_per_day: Decimal = Decimal(8)
    default_reorder_threshold: Decimal = Decimal(10)

    def __post_init__(self) -> None:
        if not isinstance(self.overpayment_policy, OverpaymentPolicy):
            raise ValueError("overpayment_policy must be OverpaymentPolicy enum.")
        if not isinstance(self.costing_discipline, CostingDiscipline):
            raise ValueError("costing_discipline must be CostingDiscipline enum.")
        if self.hours_per_day <= 0:
            raise ValueError(
                f"hours_per_day must be positive, got {self.hours_per_day}."
            )
        if self.default_reorder_threshold < 0:
            raise ValueError("default_reorder_threshold cannot be negative.")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EngineRules:
        defaults = cls()
        try:
            overpayment = OverpaymentPolicy(
                data.get("OVERPAYMENT_POLICY", defaults.overpayment_policy.value)
            )
            discipline = CostingDiscipline(
                data.get("COSTING_DISCIPLINE", defaults.costing_discipline.value)
            )
        except ValueError as exc:
            raise ValueError(f"Invalid engine rule: {exc}") from exc
        return cls(
            overpayment_policy=overpayment,
            costing_discipline=discipline,
            hours_per_day=Decimal(str(data.get("HOURS_PER_DAY", defaults.hours_per_day))),
            default_reorder_threshold=Decimal(str(
                data.get("DEFAULT_REORDER_THRESHOLD", defaults.default_reorder_threshold)
            )),
        )

    def to_dict(self) -> dict:
        return {
            "OVERPAYMENT_POLICY": self.overpayment_policy.value,
            "COSTING_DISCIPLINE": self.costing_discipline.value,
            "HOURS_PER_DAY": str(self.hours_per_day),
            "DEFAULT_REORDER_THRESHOLD": str(self.default_reorder_threshold),
        }


def rules_from_settings(settings_obj: Optional[Any] = None) -> EngineRules:
    """
    Build EngineRules from Django settings (``KARGAH_ENGINE_RULES``).

    Falls back to defaults when Django settings are not configured,
    so the engines stay usable outside a Django process.
    """
    if settings_obj is None:
        from django.conf import settings as django_settings

        if not django_settings.configured:
            return EngineRules()
        settings_obj = django_settings
    data = getattr(settings_obj, "KARGAH_ENGINE_RULES", None) or {}
    return EngineRules.from_dict(data)
