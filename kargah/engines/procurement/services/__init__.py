"""
Kargah Procurement Engine — Application Service
=================================================
Purchase receipt, edit and delete.

Receipt (per line, in invoice order, on a working copy of parts):
    raw part found      → weighted-average receipt
    assembly found      → stock only (assemblies are not costed by purchase)
    no part found       → new raw part seeded from the line

Edit applies only the net stock delta per item name; cost is left
as it was. Delete removes the invoice and leaves stock untouched.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict, List, Optional

from kargah.core.commands.base import Command
from kargah.core.primitives import ZERO, Part, PurchaseInvoice, purchase_total
from kargah.core.store import ChangeSet
from kargah.engines.inventory.valuation import apply_weighted_average_receipt
from kargah.engines.procurement.commands import (
    PROCUREMENT_PURCHASE_ADD_REQUEST,
    PROCUREMENT_PURCHASE_DELETE_REQUEST,
    PROCUREMENT_PURCHASE_EDIT_REQUEST,
)
from kargah.engines.procurement.events import resolve_procurement_event_type
from kargah.engines.service import EngineService, Handler, HandlerResult


def _name_key(name: str) -> str:
    return name.lower()


class _PartWorkingCopy:
    """Parts touched by one invoice, looked up by case-insensitive name."""

    def __init__(self, parts):
        self._by_id: Dict[int, Part] = {p.id: p for p in parts}
        self._order: List[int] = [p.id for p in parts]
        self._touched: List[int] = []

    def find_by_name(self, name: str) -> Optional[Part]:
        key = _name_key(name)
        for part_id in self._order:
            if _name_key(self._by_id[part_id].name) == key:
                return self._by_id[part_id]
        return None

    def put(self, part: Part) -> None:
        if part.id not in self._by_id:
            self._order.append(part.id)
        self._by_id[part.id] = part
        if part.id not in self._touched:
            self._touched.append(part.id)

    def touched(self) -> tuple:
        return tuple(self._by_id[part_id] for part_id in self._touched)


class ProcurementService(EngineService):
    ENGINE = "procurement"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            PROCUREMENT_PURCHASE_ADD_REQUEST: self._add_purchase,
            PROCUREMENT_PURCHASE_EDIT_REQUEST: self._edit_purchase,
            PROCUREMENT_PURCHASE_DELETE_REQUEST: self._delete_purchase,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_procurement_event_type(command_type)

    # ── Receipt ───────────────────────────────────────────────

    def _add_purchase(self, command: Command) -> HandlerResult:
        payload = command.payload
        invoice = PurchaseInvoice(
            id=payload["purchase_id"],
            supplier_id=payload["supplier_id"],
            date=payload["date"],
            items=payload["items"],
            total_amount=purchase_total(payload["items"]),
        )

        parts = _PartWorkingCopy(self._store.all(Part.COLLECTION))
        created: List[int] = []
        for item in invoice.items:
            part = parts.find_by_name(item.item_name)
            if part is None:
                part = Part(
                    id=self._ids.next_id(),
                    name=item.item_name,
                    is_assembly=False,
                    stock=item.quantity,
                    threshold=self._rules.default_reorder_threshold,
                    cost=item.unit_price,
                )
                created.append(part.id)
            elif part.is_assembly:
                part = replace(part, stock=part.stock + item.quantity)
            else:
                part = apply_weighted_average_receipt(part, item.quantity, item.unit_price)
            parts.put(part)

        changes = ChangeSet(upserts=parts.touched() + (invoice,))
        return changes, {
            "purchase_id": invoice.id,
            "total_amount": invoice.total_amount,
            "created_part_ids": tuple(created),
        }

    # ── Edit ──────────────────────────────────────────────────

    def _edit_purchase(self, command: Command) -> HandlerResult:
        payload = command.payload
        original = self._store.require(
            PurchaseInvoice.COLLECTION, payload["purchase_id"], "Purchase",
        )
        updated = replace(
            original,
            supplier_id=payload["supplier_id"],
            date=payload["date"],
            items=payload["items"],
            total_amount=purchase_total(payload["items"]),
        )

        deltas: Dict[str, Decimal] = {}
        for item in original.items:
            key = _name_key(item.item_name)
            deltas[key] = deltas.get(key, ZERO) - item.quantity
        for item in updated.items:
            key = _name_key(item.item_name)
            deltas[key] = deltas.get(key, ZERO) + item.quantity

        parts = _PartWorkingCopy(self._store.all(Part.COLLECTION))
        for key, delta in deltas.items():
            if delta == 0:
                continue
            part = parts.find_by_name(key)
            if part is None:
                continue
            new_stock = part.stock + delta
            if new_stock < 0:
                self._logger.warning(
                    "Purchase #%s edit drives '%s' stock negative (%s)",
                    updated.id, part.name, new_stock,
                )
            parts.put(replace(part, stock=new_stock))

        changes = ChangeSet(upserts=parts.touched() + (updated,))
        return changes, {
            "purchase_id": updated.id,
            "total_amount": updated.total_amount,
        }

    # ── Delete ────────────────────────────────────────────────

    def _delete_purchase(self, command: Command) -> HandlerResult:
        purchase_id = command.payload["purchase_id"]
        self._store.require(PurchaseInvoice.COLLECTION, purchase_id, "Purchase")
        return (
            ChangeSet(deletions=((PurchaseInvoice.COLLECTION, purchase_id),)),
            {"purchase_id": purchase_id},
        )
