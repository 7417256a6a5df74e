"""
Kargah Inventory Engine — Valuation
=====================================
Unit cost of any part, and the moving-average update applied when
new quantity enters stock.

resolve_cost:
    raw part        → stored cost (0 when absent)
    assembly        → Σ resolve_cost(component) × component.quantity
                      (RECURSIVE discipline, recomputed on every call)
                    → stored cost (STORED discipline)
    missing part    → 0

A part already on the current call chain contributes 0 and is not
revisited, so a cyclic BOM terminates with a finite cost.

apply_weighted_average_receipt is the single receipt formula used by
both purchase receipt and assembly completion.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Tuple

from kargah.core.config import CostingDiscipline
from kargah.core.primitives import ZERO, Part
from kargah.core.store import EntityStore

logger = logging.getLogger("kargah.inventory")


# ══════════════════════════════════════════════════════════════
# COST RESOLUTION
# ══════════════════════════════════════════════════════════════

def resolve_cost(
    store: EntityStore,
    part_id: int,
    *,
    discipline: CostingDiscipline = CostingDiscipline.RECURSIVE,
) -> Decimal:
    return _resolve(store, part_id, discipline, frozenset())


def _resolve(
    store: EntityStore,
    part_id: int,
    discipline: CostingDiscipline,
    chain: FrozenSet[int],
) -> Decimal:
    if part_id in chain:
        logger.warning(
            "Cyclic BOM: part #%s reached again via %s; counted as 0",
            part_id, sorted(chain),
        )
        return ZERO

    part = store.get(Part.COLLECTION, part_id)
    if part is None:
        return ZERO

    if not part.is_assembly or discipline == CostingDiscipline.STORED:
        return part.stored_cost

    chain = chain | {part_id}
    total = ZERO
    for component in part.components:
        total += _resolve(store, component.part_id, discipline, chain) * component.quantity
    return total


# ══════════════════════════════════════════════════════════════
# WEIGHTED-AVERAGE RECEIPT
# ══════════════════════════════════════════════════════════════

def weighted_average_cost(
    stock: Decimal,
    cost: Decimal,
    incoming_qty: Decimal,
    incoming_unit_cost: Decimal,
) -> Decimal:
    """
    newCost = stock > 0 ? (stock×cost + q×c) / (stock + q) : c
    """
    if stock <= 0:
        return incoming_unit_cost
    return (stock * cost + incoming_qty * incoming_unit_cost) / (stock + incoming_qty)


def apply_weighted_average_receipt(
    part: Part,
    incoming_qty: Decimal,
    incoming_unit_cost: Decimal,
) -> Part:
    new_cost = weighted_average_cost(
        part.stock, part.stored_cost, incoming_qty, incoming_unit_cost,
    )
    return replace(part, stock=part.stock + incoming_qty, cost=new_cost)


# ══════════════════════════════════════════════════════════════
# STOCK STATUS
# ══════════════════════════════════════════════════════════════

class StockStatus(Enum):
    OUT_OF_STOCK = "OUT_OF_STOCK"
    LOW = "LOW"
    IN_STOCK = "IN_STOCK"


def stock_status(part: Part) -> StockStatus:
    if part.stock <= 0:
        return StockStatus.OUT_OF_STOCK
    if part.stock < part.threshold:
        return StockStatus.LOW
    return StockStatus.IN_STOCK


def low_stock_parts(store: EntityStore) -> Tuple[Part, ...]:
    """Parts whose stock has fallen below their reorder threshold."""
    return store.filter(Part.COLLECTION, lambda p: p.stock < p.threshold)
