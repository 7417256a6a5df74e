"""
Kargah Inventory Engine — Policies
====================================
Stock transition validator and BOM shape policies.

Sufficiency is always checked for every affected part BEFORE any
mutation, so a rejected transition leaves all stock unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional, Sequence

from kargah.core.commands.rejection import ReasonCode, RejectionReason
from kargah.core.primitives import ZERO, BomComponent, OrderItem, Part
from kargah.core.store import EntityStore


# ══════════════════════════════════════════════════════════════
# SUFFICIENCY
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SufficiencyResult:
    ok: bool
    part_id: Optional[int] = None
    part_name: str = ""
    available: Decimal = ZERO
    required: Decimal = ZERO


def _part_label(part_id: int) -> str:
    return f"part #{part_id}"


def check_sufficiency(
    store: EntityStore,
    part_id: int,
    required_qty: Decimal,
) -> SufficiencyResult:
    """A missing part is a shortage with nothing available."""
    part = store.get(Part.COLLECTION, part_id)
    if part is None:
        return SufficiencyResult(
            ok=False, part_id=part_id, part_name=_part_label(part_id),
            available=ZERO, required=required_qty,
        )
    return SufficiencyResult(
        ok=part.stock >= required_qty,
        part_id=part_id,
        part_name=part.name,
        available=part.stock,
        required=required_qty,
    )


def _check_requirements(
    store: EntityStore,
    requirements: Dict[int, Decimal],
) -> SufficiencyResult:
    for part_id, required in requirements.items():
        result = check_sufficiency(store, part_id, required)
        if not result.ok:
            return result
    return SufficiencyResult(ok=True)


def bom_requirements(components: Iterable[BomComponent], order_quantity: Decimal) -> Dict[int, Decimal]:
    """Component quantities scaled by the order quantity, merged per part."""
    requirements: Dict[int, Decimal] = {}
    for component in components:
        requirements[component.part_id] = (
            requirements.get(component.part_id, ZERO)
            + component.quantity * order_quantity
        )
    return requirements


def order_requirements(items: Iterable[OrderItem]) -> Dict[int, Decimal]:
    requirements: Dict[int, Decimal] = {}
    for item in items:
        requirements[item.product_id] = (
            requirements.get(item.product_id, ZERO) + item.quantity
        )
    return requirements


def check_bom_sufficiency(
    store: EntityStore,
    part: Part,
    order_quantity: Decimal,
) -> SufficiencyResult:
    """Every BOM component scaled by ``order_quantity``; first shortage wins."""
    return _check_requirements(store, bom_requirements(part.components, order_quantity))


def check_order_sufficiency(
    store: EntityStore,
    items: Sequence[OrderItem],
) -> SufficiencyResult:
    """Each line against the product's own stock; no BOM cascade."""
    return _check_requirements(store, order_requirements(items))


def insufficient_stock_policy(result: SufficiencyResult) -> Optional[RejectionReason]:
    if result.ok:
        return None
    return RejectionReason(
        code=ReasonCode.INSUFFICIENT_STOCK,
        message=(
            f"Insufficient stock for '{result.part_name}': "
            f"{result.available} available, {result.required} required."
        ),
        policy_name="insufficient_stock_policy",
        details={
            "part_id": result.part_id,
            "part_name": result.part_name,
            "available": result.available,
            "required": result.required,
        },
    )


# ══════════════════════════════════════════════════════════════
# BOM SHAPE
# ══════════════════════════════════════════════════════════════

def bom_components_must_exist_policy(
    store: EntityStore,
    components: Sequence[BomComponent],
) -> Optional[RejectionReason]:
    for component in components:
        if store.get(Part.COLLECTION, component.part_id) is None:
            return RejectionReason(
                code=ReasonCode.NOT_FOUND,
                message=f"BOM component part #{component.part_id} not found.",
                policy_name="bom_components_must_exist_policy",
                details={"entity": "Part", "id": component.part_id},
            )
    return None


def bom_must_be_acyclic_policy(
    store: EntityStore,
    part_id: int,
    components: Sequence[BomComponent],
) -> Optional[RejectionReason]:
    """
    Reject a BOM for ``part_id`` that would reach ``part_id`` again
    through its components (directly or via nested assemblies).
    """
    pending = [c.part_id for c in components]
    seen = set()
    while pending:
        current = pending.pop()
        if current == part_id:
            return RejectionReason(
                code=ReasonCode.CYCLIC_BOM,
                message=f"BOM of part #{part_id} would contain itself.",
                policy_name="bom_must_be_acyclic_policy",
                details={"part_id": part_id},
            )
        if current in seen:
            continue
        seen.add(current)
        part = store.get(Part.COLLECTION, current)
        if part is not None and part.is_assembly:
            pending.extend(c.part_id for c in part.components)
    return None
