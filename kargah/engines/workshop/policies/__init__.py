"""
Kargah Workshop Engine — Policies
===================================
Assembly order lifecycle: PENDING → COMPLETED (terminal).
Production logs and deletion are only allowed while PENDING.
"""

from __future__ import annotations

from typing import Optional

from kargah.core.commands.rejection import ReasonCode, RejectionReason
from kargah.core.primitives import AssemblyOrder, Part


def order_must_be_pending_policy(
    order: AssemblyOrder,
    action: str,
) -> Optional[RejectionReason]:
    if order.is_pending:
        return None
    return RejectionReason(
        code=ReasonCode.INVALID_STATE,
        message=(
            f"Assembly order #{order.id} is {order.status.value}; "
            f"cannot {action}."
        ),
        policy_name="order_must_be_pending_policy",
        details={"status": order.status.value},
    )


def target_must_be_assembly_policy(part: Part) -> Optional[RejectionReason]:
    if part.is_assembly:
        return None
    return RejectionReason(
        code=ReasonCode.VALIDATION_FAILED,
        message=f"Part '{part.name}' is not an assembly.",
        policy_name="target_must_be_assembly_policy",
        details={"part_id": part.id},
    )


def recipe_required_policy(part: Part) -> Optional[RejectionReason]:
    if part.has_recipe:
        return None
    return RejectionReason(
        code=ReasonCode.MISSING_RECIPE,
        message=f"Assembly '{part.name}' has no bill of materials.",
        policy_name="recipe_required_policy",
        details={"part_id": part.id, "part_name": part.name},
    )
