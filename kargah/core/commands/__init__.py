"""
Kargah Command Layer
======================
Every action begins as a Command built from a validated request.
Rejected commands surface as typed errors before any mutation.
"""

from kargah.core.commands.base import (
    Command,
    build_command,
    derive_rejection_event_type,
    derive_source_engine,
)
from kargah.core.commands.bus import (
    CommandBus,
    ExecutionResult,
    NoHandlerRegistered,
)
from kargah.core.commands.errors import (
    CommandRejected,
    InsufficientStockError,
    InvalidStateError,
    MissingRecipeError,
    NotFoundError,
    ValidationError,
    error_for,
    not_found,
    raise_rejection,
)
from kargah.core.commands.rejection import (
    ReasonCode,
    RejectionReason,
)

__all__ = [
    "Command",
    "build_command",
    "derive_rejection_event_type",
    "derive_source_engine",
    "CommandBus",
    "ExecutionResult",
    "NoHandlerRegistered",
    "CommandRejected",
    "InsufficientStockError",
    "InvalidStateError",
    "MissingRecipeError",
    "NotFoundError",
    "ValidationError",
    "error_for",
    "not_found",
    "raise_rejection",
    "ReasonCode",
    "RejectionReason",
]
