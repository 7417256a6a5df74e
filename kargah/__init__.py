"""
Kargah — Workshop Costing & Ledger Engine
==========================================
Inventory valuation, stock-transition validation, transaction appliers
and period ledger reports for a small manufacturing workshop.
"""

__version__ = "0.1.0"
