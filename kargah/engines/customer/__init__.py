"""
Kargah Customer Engine
========================
Customer and supplier contacts.
"""

from kargah.engines.customer.services import CustomerService

__all__ = ["CustomerService"]
