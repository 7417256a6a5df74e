"""
Kargah Sales Engine
=====================
Sales orders, payments and delivery.
"""

from kargah.engines.sales.services import (
    SalesService,
    cost_of_goods,
    remaining_balance,
    total_paid,
)

__all__ = ["SalesService", "cost_of_goods", "remaining_balance", "total_paid"]
