# pos/services/order_completion.py

"""
ORDER COMPLETION ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Complete payment of a POS order (atomic, auditable).
- Gate on payments: sum(payments) must match the order total (±0.01).
- Attach the canonical walk-in customer when the order has none.
- Flip the order to PAID, then post it to the general ledger.

Partial-failure policy (deliberate):
- GL posting runs in a savepoint. If it fails, the savepoint is rolled back,
  the failure is logged, and the payment completion still commits.
- The caller gets accounting=None. Paid-but-unposted orders stay visible via
  the accounting status readers and are retried by
  `manage.py sync_pos_to_ledger`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounting.services.exceptions import (
    AlreadyPaidError,
    NotFoundError,
    PaymentMismatchError,
)
from accounting.services.pos_accounting_service import (
    PostingResult,
    load_configuration,
    post_order_to_gl,
)
from pos.models import Order
from pos.services.order_lifecycle import validate_transition
from sales.services.business_partner_service import ensure_walk_in_customer

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
PAYMENT_TOLERANCE = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderCompletionResult:
    order: Order
    accounting: PostingResult | None


def _lock_order(order_id) -> Order:
    try:
        return (
            Order.objects.select_for_update()
            .select_related("business_unit")
            .get(pk=order_id)
        )
    except (Order.DoesNotExist, ValidationError, ValueError) as exc:
        raise NotFoundError(f"Order {order_id} not found") from exc


def payments_total(order: Order) -> Decimal:
    return sum(
        (_money(p.amount) for p in order.payments.all()),
        Decimal("0.00"),
    )


def _post_in_savepoint(order: Order, *, author=None) -> PostingResult | None:
    try:
        with transaction.atomic():
            return post_order_to_gl(order, author=author)
    except Exception:
        # Reconciled later by `manage.py sync_pos_to_ledger`.
        logger.exception(
            "GL posting failed during order completion; payment kept",
            extra={
                "order_id": str(order.id),
                "business_unit_id": str(order.business_unit_id),
            },
        )
        return None


@transaction.atomic
def complete_order_payment(order_id, *, auto_post_to_gl: bool = True, author=None) -> OrderCompletionResult:
    order = _lock_order(order_id)

    if order.status == Order.STATUS_PAID or order.is_paid:
        raise AlreadyPaidError(f"Order {order.id} is already paid")

    validate_transition(order=order, target_status=Order.STATUS_PAID)

    # --------------------------------------------------
    # PAYMENT GATE
    # --------------------------------------------------
    paid = payments_total(order)
    total = _money(order.total_amount)

    if abs(paid - total) > PAYMENT_TOLERANCE:
        raise PaymentMismatchError(paid=paid, total=total)

    # --------------------------------------------------
    # CUSTOMER
    # --------------------------------------------------
    update_fields = ["status", "is_paid", "paid_at", "amount_paid", "updated_at"]

    if order.business_partner_id is None:
        config = load_configuration(order.business_unit_id)
        order.business_partner = ensure_walk_in_customer(
            business_unit=order.business_unit,
            bp_code=config.default_customer_bp_code if config else None,
        )
        update_fields.append("business_partner")

    # --------------------------------------------------
    # MARK PAID
    # --------------------------------------------------
    order.status = Order.STATUS_PAID
    order.is_paid = True
    order.paid_at = timezone.now()
    order.amount_paid = paid
    order.save(update_fields=update_fields)

    logger.info(
        "POS order payment completed",
        extra={
            "order_id": str(order.id),
            "business_unit_id": str(order.business_unit_id),
            "amount_paid": str(paid),
        },
    )

    # --------------------------------------------------
    # GL POSTING (failure tolerated)
    # --------------------------------------------------
    accounting = None
    if auto_post_to_gl:
        accounting = _post_in_savepoint(order, author=author)
        order.refresh_from_db()

    return OrderCompletionResult(order=order, accounting=accounting)
