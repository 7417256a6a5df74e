"""
Kargah Inventory Engine
=========================
Parts, bills of materials, valuation and the stock transition validator.
"""

from kargah.engines.inventory.policies import (
    SufficiencyResult,
    check_bom_sufficiency,
    check_order_sufficiency,
    check_sufficiency,
)
from kargah.engines.inventory.services import InventoryService
from kargah.engines.inventory.valuation import (
    StockStatus,
    apply_weighted_average_receipt,
    low_stock_parts,
    resolve_cost,
    stock_status,
    weighted_average_cost,
)

__all__ = [
    "SufficiencyResult",
    "check_bom_sufficiency",
    "check_order_sufficiency",
    "check_sufficiency",
    "InventoryService",
    "StockStatus",
    "apply_weighted_average_receipt",
    "low_stock_parts",
    "resolve_cost",
    "stock_status",
    "weighted_average_cost",
]
