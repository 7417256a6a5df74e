"""
Kargah Inventory Engine — Application Service
===============================================
Part CRUD. Every write goes through the BOM policies first:
components must exist and must not lead back to the part itself.
"""

from __future__ import annotations

from typing import Dict

from kargah.core.commands.base import Command
from kargah.core.commands.errors import raise_rejection
from kargah.core.primitives import Part
from kargah.core.store import ChangeSet
from kargah.engines.inventory.commands import (
    INVENTORY_PART_ADD_REQUEST,
    INVENTORY_PART_DELETE_REQUEST,
    INVENTORY_PART_EDIT_REQUEST,
)
from kargah.engines.inventory.events import resolve_inventory_event_type
from kargah.engines.inventory.policies import (
    bom_components_must_exist_policy,
    bom_must_be_acyclic_policy,
)
from kargah.engines.service import EngineService, Handler, HandlerResult


def _part_from_payload(payload: dict) -> Part:
    return Part(
        id=payload["part_id"],
        name=payload["name"],
        is_assembly=payload["is_assembly"],
        stock=payload["stock"],
        threshold=payload["threshold"],
        cost=payload["cost"],
        components=payload["components"],
    )


class InventoryService(EngineService):
    ENGINE = "inventory"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            INVENTORY_PART_ADD_REQUEST: self._add_part,
            INVENTORY_PART_EDIT_REQUEST: self._edit_part,
            INVENTORY_PART_DELETE_REQUEST: self._delete_part,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_inventory_event_type(command_type)

    def _check_bom(self, part: Part) -> None:
        raise_rejection(bom_components_must_exist_policy(self._store, part.components))
        raise_rejection(bom_must_be_acyclic_policy(self._store, part.id, part.components))

    def _add_part(self, command: Command) -> HandlerResult:
        part = _part_from_payload(command.payload)
        self._check_bom(part)
        return ChangeSet(upserts=(part,)), {"part_id": part.id, "name": part.name}

    def _edit_part(self, command: Command) -> HandlerResult:
        part = _part_from_payload(command.payload)
        self._store.require(Part.COLLECTION, part.id, "Part")
        self._check_bom(part)
        return ChangeSet(upserts=(part,)), {"part_id": part.id, "name": part.name}

    def _delete_part(self, command: Command) -> HandlerResult:
        part_id = command.payload["part_id"]
        self._store.require(Part.COLLECTION, part_id, "Part")
        return (
            ChangeSet(deletions=((Part.COLLECTION, part_id),)),
            {"part_id": part_id},
        )
