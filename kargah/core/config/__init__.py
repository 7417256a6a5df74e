"""
Kargah Core Config — Public API
=================================
Admin-configurable engine rules.
"""

from kargah.core.config.rules import (
    CostingDiscipline,
    EngineRules,
    OverpaymentPolicy,
    rules_from_settings,
)

__all__ = [
    "CostingDiscipline",
    "EngineRules",
    "OverpaymentPolicy",
    "rules_from_settings",
]
