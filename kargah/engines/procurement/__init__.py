"""
Kargah Procurement Engine
===========================
Purchase invoices and their receipt into stock.
"""

from kargah.engines.procurement.services import ProcurementService

__all__ = ["ProcurementService"]
