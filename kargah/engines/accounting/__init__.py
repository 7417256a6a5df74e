"""
Kargah Accounting Engine
==========================
Operating expenses.
"""

from kargah.engines.accounting.services import AccountingService

__all__ = ["AccountingService"]
