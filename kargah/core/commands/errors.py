"""
Kargah Command Layer — Typed Failures
=======================================
Every rejected command surfaces as one of these exceptions.

They are raised BEFORE any mutation is committed, so catching one
always means the entity store is unchanged.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from kargah.core.commands.rejection import ReasonCode, RejectionReason


class CommandRejected(Exception):
    """Base error for every rejected command. Carries the RejectionReason."""

    def __init__(self, reason: RejectionReason):
        self.reason = reason
        super().__init__(reason.message)

    @property
    def code(self) -> str:
        return self.reason.code


class NotFoundError(CommandRejected):
    """Referenced entity id does not exist."""


class InvalidStateError(CommandRejected):
    """Command attempted from a lifecycle state that forbids it."""


class InsufficientStockError(CommandRejected):
    """A stock-decreasing transition would drive a part below zero."""

    @property
    def part_id(self) -> Optional[int]:
        return self.reason.details.get("part_id")

    @property
    def part_name(self) -> str:
        return self.reason.details.get("part_name", "")

    @property
    def available(self) -> Decimal:
        return self.reason.details.get("available", Decimal(0))

    @property
    def required(self) -> Decimal:
        return self.reason.details.get("required", Decimal(0))


class MissingRecipeError(CommandRejected):
    """Assembly part has no bill of materials."""


class ValidationError(CommandRejected, ValueError):
    """Malformed input (non-positive quantity, missing selection, ...)."""

    def __init__(self, reason_or_message, policy_name: str = "request_validation"):
        if isinstance(reason_or_message, RejectionReason):
            reason = reason_or_message
        else:
            reason = RejectionReason(
                code=ReasonCode.VALIDATION_FAILED,
                message=str(reason_or_message),
                policy_name=policy_name,
            )
        super().__init__(reason)


# ══════════════════════════════════════════════════════════════
# CODE → EXCEPTION MAPPING
# ══════════════════════════════════════════════════════════════

_ERRORS_BY_CODE = {
    ReasonCode.NOT_FOUND: NotFoundError,
    ReasonCode.INVALID_STATE: InvalidStateError,
    ReasonCode.INSUFFICIENT_STOCK: InsufficientStockError,
    ReasonCode.MISSING_RECIPE: MissingRecipeError,
    ReasonCode.VALIDATION_FAILED: ValidationError,
    ReasonCode.OVERPAYMENT: ValidationError,
    ReasonCode.CYCLIC_BOM: ValidationError,
}


def error_for(reason: RejectionReason) -> CommandRejected:
    error_cls = _ERRORS_BY_CODE.get(reason.code, CommandRejected)
    return error_cls(reason)


def raise_rejection(reason: Optional[RejectionReason]) -> None:
    """Raise the typed error for ``reason``; no-op when the policy allowed."""
    if reason is not None:
        raise error_for(reason)


def not_found(label: str, entity_id, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.NOT_FOUND,
        message=f"{label} #{entity_id} not found.",
        policy_name=policy_name,
        details={"entity": label, "id": entity_id},
    )
