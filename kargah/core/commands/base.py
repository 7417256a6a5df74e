"""
Kargah Command Layer — Command Base Contract
==============================================
Every change to workshop state starts life as a Command.

Requests (one frozen dataclass per operation, living in each
engine's ``commands`` module) check their own fields and then call
``build_command`` to produce the Command the bus routes.

Naming:
    <engine>.<entity>.<action>.request
    e.g. inventory.part.add.request, hr.salary.pay.request

A Command never touches the store and never decides anything.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List

REQUEST_SUFFIX = ".request"
REJECTED_SUFFIX = ".rejected"
MIN_TYPE_SEGMENTS = 4


def split_command_type(command_type: str) -> List[str]:
    """
    Check the naming rule and return the dotted segments.

    Raises ValueError naming the broken rule.
    """
    if not isinstance(command_type, str) or not command_type:
        raise ValueError("command_type must be a non-empty string.")
    if not command_type.endswith(REQUEST_SUFFIX):
        raise ValueError(
            f"command_type '{command_type}' must end with '{REQUEST_SUFFIX}', "
            f"as in 'inventory.part.add.request'."
        )
    segments = command_type.split(".")
    if len(segments) < MIN_TYPE_SEGMENTS:
        raise ValueError(
            f"command_type '{command_type}' is too short: expected "
            f"<engine>.<entity>.<action>.request (minimum 4 segments)."
        )
    return segments


@dataclass(frozen=True)
class Command:
    """
    A validated, immutable declaration of intent.

    ``source_engine`` repeats the first segment of ``command_type``
    so the bus can route without parsing.
    """

    command_id: uuid.UUID
    command_type: str
    payload: dict
    issued_at: datetime
    source_engine: str

    def __post_init__(self):
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError(
                f"command_id must be a UUID instance "
                f"(received {type(self.command_id).__name__})."
            )

        engine = split_command_type(self.command_type)[0]
        if engine != self.source_engine:
            raise ValueError(
                f"Engine prefix '{engine}' of '{self.command_type}' "
                f"does not match source_engine '{self.source_engine}'."
            )

        if not isinstance(self.payload, dict):
            raise TypeError(
                f"payload must be a dict, not {type(self.payload).__name__}."
            )

    @property
    def rejection_type(self) -> str:
        return derive_rejection_event_type(self.command_type)


def derive_source_engine(command_type: str) -> str:
    """inventory.part.add.request -> inventory"""
    return command_type.partition(".")[0]


def derive_rejection_event_type(command_type: str) -> str:
    """workshop.assembly.complete.request -> workshop.assembly.complete.rejected"""
    split_command_type(command_type)
    return command_type[: -len(REQUEST_SUFFIX)] + REJECTED_SUFFIX


def build_command(
    command_type: str,
    payload: dict,
    *,
    command_id: uuid.UUID,
    issued_at: datetime,
) -> Command:
    """Assemble a Command, deriving ``source_engine`` from the type."""
    return Command(
        command_id=command_id,
        command_type=command_type,
        payload=payload,
        issued_at=issued_at,
        source_engine=derive_source_engine(command_type),
    )
