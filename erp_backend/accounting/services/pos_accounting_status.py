# accounting/services/pos_accounting_status.py

"""
POS ACCOUNTING STATUS / SUMMARY READERS

Read-only projections of an order's posting state.

Guarantees:
- Side-effect free
- Tolerate partially posted orders (AR only, JE only, or neither)
- The journal shown for an order is order.journal_entry, falling back to
  order.ar_invoice.journal_entry
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError

from accounting.services.exceptions import NotFoundError


def _money_str(value) -> str:
    return str(Decimal(value if value is not None else "0.00").quantize(Decimal("0.01")))


def _resolved_journal_entry(order):
    if order.journal_entry_id:
        return order.journal_entry
    if order.ar_invoice_id and order.ar_invoice.journal_entry_id:
        return order.ar_invoice.journal_entry
    return None


def _clean_ids(order_ids) -> list[uuid.UUID]:
    cleaned: list[uuid.UUID] = []
    for raw in order_ids or []:
        try:
            value = raw if isinstance(raw, uuid.UUID) else uuid.UUID(str(raw))
        except (ValueError, TypeError, AttributeError):
            continue
        if value not in cleaned:
            cleaned.append(value)
    return cleaned


def get_order_accounting_summary(order_id) -> dict:
    from pos.models import Order

    try:
        order = (
            Order.objects.select_related(
                "ar_invoice__journal_entry",
                "journal_entry",
            )
            .get(pk=order_id)
        )
    except (Order.DoesNotExist, ValidationError, ValueError) as exc:
        raise NotFoundError(f"Order {order_id} not found") from exc

    journal_entry = _resolved_journal_entry(order)

    journal_lines: list[dict] = []
    total_debits = Decimal("0.00")
    total_credits = Decimal("0.00")

    if journal_entry is not None:
        for line in journal_entry.lines.select_related("gl_account").order_by("line_no"):
            account = line.gl_account
            journal_lines.append(
                {
                    "line_no": line.line_no,
                    "account_code": getattr(account, "account_code", None) or "Unknown",
                    "account_name": getattr(account, "name", None) or "Unknown",
                    "debit": _money_str(line.debit) if line.debit is not None else None,
                    "credit": _money_str(line.credit) if line.credit is not None else None,
                    "description": line.description,
                }
            )
            total_debits += line.debit or Decimal("0.00")
            total_credits += line.credit or Decimal("0.00")

    return {
        "order_id": str(order.id),
        "order_status": order.status,
        "is_paid": order.is_paid,
        "is_posted_to_ar": bool(order.ar_invoice_id),
        "is_posted_to_gl": journal_entry is not None,
        "ar_invoice_number": order.ar_invoice.doc_num if order.ar_invoice_id else None,
        "journal_entry_number": journal_entry.doc_num if journal_entry else None,
        "is_journal_posted": bool(journal_entry and journal_entry.is_posted),
        "totals": {
            "subtotal": _money_str(order.subtotal),
            "tax": _money_str(order.tax),
            "discount": _money_str(order.discount_value),
            "total": _money_str(order.total_amount),
        },
        "journal_lines": journal_lines,
        "total_debits": _money_str(total_debits),
        "total_credits": _money_str(total_credits),
    }


def get_orders_accounting_status(order_ids) -> list[dict]:
    """
    Lightweight per-order posting status for list/dashboard use.
    Unknown ids are omitted; result follows the input order.
    """
    from pos.models import Order

    ids = _clean_ids(order_ids)
    if not ids:
        return []

    orders = {
        o.id: o
        for o in Order.objects.select_related(
            "ar_invoice__journal_entry", "journal_entry"
        ).filter(pk__in=ids)
    }

    rows: list[dict] = []
    for order_id in ids:
        order = orders.get(order_id)
        if order is None:
            continue

        journal_entry = _resolved_journal_entry(order)
        rows.append(
            {
                "order_id": str(order.id),
                "order_status": order.status,
                "total_amount": _money_str(order.total_amount),
                "is_posted_to_ar": bool(order.ar_invoice_id),
                "is_posted_to_gl": journal_entry is not None,
                "ar_invoice_number": order.ar_invoice.doc_num if order.ar_invoice_id else None,
                "journal_entry_number": journal_entry.doc_num if journal_entry else None,
                "is_journal_posted": bool(journal_entry and journal_entry.is_posted),
            }
        )
    return rows
