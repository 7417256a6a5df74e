"""
Kargah Inventory Engine — Event Types
=======================================
Past-tense names for accepted inventory commands.
"""

from __future__ import annotations

INVENTORY_PART_ADDED_V1 = "inventory.part.added.v1"
INVENTORY_PART_EDITED_V1 = "inventory.part.edited.v1"
INVENTORY_PART_DELETED_V1 = "inventory.part.deleted.v1"

INVENTORY_EVENT_TYPES = (
    INVENTORY_PART_ADDED_V1,
    INVENTORY_PART_EDITED_V1,
    INVENTORY_PART_DELETED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "inventory.part.add.request": INVENTORY_PART_ADDED_V1,
    "inventory.part.edit.request": INVENTORY_PART_EDITED_V1,
    "inventory.part.delete.request": INVENTORY_PART_DELETED_V1,
}


def resolve_inventory_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
