"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed lifecycle transitions
for POS Order entities:

    OPEN ──► PREPARING ──► PAID (terminal)
      │          │
      └──────────┴──► CANCELLED (terminal)
      OPEN ─────────► PAID

DESIGN PRINCIPLES:
- No database writes
- No side effects
- Single source of truth
"""

from accounting.services.exceptions import InvalidStateError
from pos.models import Order

# ============================================================
# DOMAIN ERRORS
# ============================================================


class InvalidOrderTransitionError(InvalidStateError):
    code = "INVALID_TRANSITION"


# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_PAID,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_OPEN: {
        Order.STATUS_PREPARING,
        Order.STATUS_PAID,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_PREPARING: {
        Order.STATUS_PAID,
        Order.STATUS_CANCELLED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(
        from_status=order.status,
        to_status=target_status,
    ):
        raise InvalidOrderTransitionError(
            f"Order {order.id} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )
