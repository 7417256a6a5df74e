"""
Kargah Workshop Engine
========================
Assembly orders, production logs and assembly completion.
"""

from kargah.engines.workshop.services import (
    WorkshopService,
    effective_hourly_rate,
    labor_cost,
)

__all__ = ["WorkshopService", "effective_hourly_rate", "labor_cost"]
