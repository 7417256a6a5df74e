"""
Kargah Sales Engine — Policies
================================
Order lifecycle guards:

    PENDING ──(Σ payments ≥ total)──▶ PAID ──(deliver)──▶ DELIVERED

Deletion is the cancel path and is allowed in any status.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from kargah.core.commands.rejection import ReasonCode, RejectionReason
from kargah.core.config import OverpaymentPolicy
from kargah.core.primitives import OrderStatus, SalesOrder


def payment_requires_pending_policy(order: SalesOrder) -> Optional[RejectionReason]:
    if order.status == OrderStatus.PENDING:
        return None
    return RejectionReason(
        code=ReasonCode.INVALID_STATE,
        message=(
            f"Order #{order.id} is {order.status.value}; "
            f"payments are accepted only while PENDING."
        ),
        policy_name="payment_requires_pending_policy",
        details={"status": order.status.value},
    )


def overpayment_policy(
    order: SalesOrder,
    amount: Decimal,
    policy: OverpaymentPolicy,
) -> Optional[RejectionReason]:
    if policy == OverpaymentPolicy.ACCEPT:
        return None
    remaining = order.remaining_balance
    if amount <= remaining:
        return None
    return RejectionReason(
        code=ReasonCode.OVERPAYMENT,
        message=(
            f"Payment of {amount} exceeds the remaining balance "
            f"{remaining} of order #{order.id}."
        ),
        policy_name="overpayment_policy",
        details={"amount": amount, "remaining": remaining},
    )


def delivery_requires_paid_policy(order: SalesOrder) -> Optional[RejectionReason]:
    if order.status == OrderStatus.PAID:
        return None
    return RejectionReason(
        code=ReasonCode.INVALID_STATE,
        message=(
            f"Order #{order.id} is {order.status.value}; "
            f"only PAID orders can be delivered."
        ),
        policy_name="delivery_requires_paid_policy",
        details={"status": order.status.value},
    )
