"""
Kargah Workshop Engine — Event Types
======================================
"""

from __future__ import annotations

WORKSHOP_ASSEMBLY_ADDED_V1 = "workshop.assembly.added.v1"
WORKSHOP_ASSEMBLY_COMPLETED_V1 = "workshop.assembly.completed.v1"
WORKSHOP_ASSEMBLY_DELETED_V1 = "workshop.assembly.deleted.v1"
WORKSHOP_PRODUCTION_LOG_ADDED_V1 = "workshop.productionlog.added.v1"
WORKSHOP_PRODUCTION_LOG_EDITED_V1 = "workshop.productionlog.edited.v1"
WORKSHOP_PRODUCTION_LOG_DELETED_V1 = "workshop.productionlog.deleted.v1"

WORKSHOP_EVENT_TYPES = (
    WORKSHOP_ASSEMBLY_ADDED_V1,
    WORKSHOP_ASSEMBLY_COMPLETED_V1,
    WORKSHOP_ASSEMBLY_DELETED_V1,
    WORKSHOP_PRODUCTION_LOG_ADDED_V1,
    WORKSHOP_PRODUCTION_LOG_EDITED_V1,
    WORKSHOP_PRODUCTION_LOG_DELETED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "workshop.assembly.add.request": WORKSHOP_ASSEMBLY_ADDED_V1,
    "workshop.assembly.complete.request": WORKSHOP_ASSEMBLY_COMPLETED_V1,
    "workshop.assembly.delete.request": WORKSHOP_ASSEMBLY_DELETED_V1,
    "workshop.productionlog.add.request": WORKSHOP_PRODUCTION_LOG_ADDED_V1,
    "workshop.productionlog.edit.request": WORKSHOP_PRODUCTION_LOG_EDITED_V1,
    "workshop.productionlog.delete.request": WORKSHOP_PRODUCTION_LOG_DELETED_V1,
}


def resolve_workshop_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
