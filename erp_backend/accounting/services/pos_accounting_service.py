# accounting/services/pos_accounting_service.py

"""
======================================================
PATH: accounting/services/pos_accounting_service.py
======================================================
POS → GENERAL LEDGER POSTING ENGINE

This service is the ONLY bridge between the POS domain and the ledger.

Given a PAID order it produces, in ONE transaction:
1) (optional) an A/R invoice, born CLOSED / SETTLED
2) a balanced journal entry:
     DR payments (per payment method mapping)
     CR revenue (per order item)
     CR sales tax
     DR sales discount
3) COGS lines on the same journal entry (recipe × standard cost)
4) link-back: order.ar_invoice / order.journal_entry / invoice.journal_entry

Hard rules:
- Preconditions are checked before any write, then re-checked on the
  locked order row (at-most-once posting).
- Configuration and an OPEN period covering today are checked before any
  document number is allocated.
- Rounding differences are absorbed by the FIRST payment line, never by
  revenue. No payment line to absorb it => UnbalancedEntryError.
- Any failure rolls back everything this call wrote (numbers included).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from accounting.services.account_resolver import (
    get_discount_account,
    get_payment_account,
    get_sales_account,
)
from accounting.services.cogs_posting import post_order_cogs
from accounting.services.exceptions import (
    AlreadyPostedError,
    ConfigurationError,
    InvalidStateError,
    NotFoundError,
    NotPaidError,
    UnbalancedEntryError,
)
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.numbering_service import allocate_doc_num
from accounting.services.period_lock import (
    PeriodLockedError,
    assert_period_open,
    find_open_period,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _money(value) -> Decimal:
    if value is None:
        return ZERO
    return Decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PostingResult:
    journal_entry: object
    ar_invoice: object | None
    total_debits: Decimal
    total_credits: Decimal
    cogs_total: Decimal = ZERO

    def as_dict(self) -> dict:
        return {
            "ar_invoice_id": str(self.ar_invoice.id) if self.ar_invoice else None,
            "ar_invoice_number": self.ar_invoice.doc_num if self.ar_invoice else None,
            "journal_entry_id": str(self.journal_entry.id) if self.journal_entry else None,
            "journal_entry_number": self.journal_entry.doc_num if self.journal_entry else None,
            "total_debits": str(self.total_debits),
            "total_credits": str(self.total_credits),
        }


# --------------------------------------------------
# LOADING
# --------------------------------------------------


def _posting_queryset():
    from pos.models import Order

    return Order.objects.select_related(
        "business_unit",
        "business_partner",
        "discount__gl_account",
        "user",
    ).prefetch_related(
        "items__menu_item__gl_mapping__sales_account",
        "items__menu_item__gl_mapping__cogs_account",
        "items__menu_item__gl_mapping__inventory_account",
        "items__menu_item__recipe__recipe_items__inventory_item",
        "payments__payment_method",
    )


def _lock_order(order_id):
    from pos.models import Order

    try:
        Order.objects.select_for_update().only("id").get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise NotFoundError(f"Order {order_id} not found") from exc

    return _posting_queryset().get(pk=order_id)


def load_configuration(business_unit_id):
    from pos.models import PosConfiguration

    return (
        PosConfiguration.objects.select_related(
            "sales_revenue_account",
            "sales_tax_account",
            "cash_account",
            "discount_account",
        )
        .filter(business_unit_id=business_unit_id)
        .first()
    )


# --------------------------------------------------
# VALIDATION
# --------------------------------------------------


def _validate_preconditions(order) -> None:
    from pos.models import Order

    if order is None:
        raise InvalidStateError("Order cannot be None")

    if order.journal_entry_id or order.ar_invoice_id:
        raise AlreadyPostedError("This order has already been posted to the GL.")

    if order.status != Order.STATUS_PAID:
        raise NotPaidError("Only paid orders can be posted to the GL.")


def _validate_configuration(config):
    if config is None:
        raise ConfigurationError("POS configuration not found")

    if not config.auto_post_to_gl:
        raise ConfigurationError(
            "Automatic GL posting is not enabled for this business unit."
        )

    if not (
        config.ar_invoice_series_id
        and config.journal_entry_series_id
        and config.sales_tax_account_id
    ):
        raise ConfigurationError(
            "Essential configuration (AR Series, JE Series, Sales Tax Account) is missing."
        )

    return config


def _validate_period(*, business_unit_id, posting_date) -> None:
    try:
        assert_period_open(business_unit_id=business_unit_id, posting_date=posting_date)
    except PeriodLockedError as exc:
        raise ConfigurationError(str(exc)) from exc

    if find_open_period(business_unit_id=business_unit_id, on_date=posting_date) is None:
        raise ConfigurationError("No open accounting period found")


# --------------------------------------------------
# ACCOUNTS
# --------------------------------------------------


def _resolve_sales_accounts(*, order, config) -> dict:
    """{order_item.pk: GlAccount}; MissingGLMappingError names the menu item."""
    return {
        item.pk: get_sales_account(menu_item=item.menu_item, config=config)
        for item in order.items.all()
    }


# --------------------------------------------------
# AR INVOICE
# --------------------------------------------------


def _create_ar_invoice(*, order, config, posting_date, sales_accounts: dict):
    from sales.models import ARInvoice, ARInvoiceLine
    from sales.services.business_partner_service import ensure_walk_in_customer

    doc_num = allocate_doc_num(config.ar_invoice_series_id)

    partner = order.business_partner or ensure_walk_in_customer(
        business_unit=order.business_unit,
        bp_code=config.default_customer_bp_code,
    )

    invoice = ARInvoice.objects.create(
        business_unit=order.business_unit,
        doc_num=doc_num,
        business_partner=partner,
        posting_date=posting_date,
        due_date=posting_date,
        document_date=timezone.localtime(order.created_at).date(),
        total_amount=_money(order.total_amount),
        amount_paid=_money(order.amount_paid),
        status=ARInvoice.STATUS_CLOSED,
        settlement_status=ARInvoice.SETTLEMENT_SETTLED,
        remarks=f"AR Invoice for POS Order #{order.id}",
    )

    ARInvoiceLine.objects.bulk_create(
        [
            ARInvoiceLine(
                invoice=invoice,
                line_no=line_no,
                description=item.menu_item.name,
                quantity=Decimal(item.quantity),
                unit_price=_money(item.price_at_sale),
                line_total=_money(item.line_total),
                gl_account=sales_accounts[item.pk],
            )
            for line_no, item in enumerate(order.items.all(), start=1)
        ]
    )
    return invoice


# --------------------------------------------------
# JOURNAL LINES
# --------------------------------------------------


def _payment_mapped_accounts(order) -> dict:
    from pos.models import PaymentMethodGlMapping

    method_ids = {p.payment_method_id for p in order.payments.all()}
    mappings = PaymentMethodGlMapping.objects.select_related("gl_account").filter(
        business_unit_id=order.business_unit_id,
        payment_method_id__in=method_ids,
    )
    return {m.payment_method_id: m.gl_account for m in mappings}


def build_journal_lines(*, order, config, sales_accounts: dict) -> tuple[list[dict], Decimal, Decimal]:
    """
    Lines in fixed order: payments (DR), items (CR), tax (CR), discount (DR).
    Returns (lines, total_debits, total_credits) after balance adjustment.
    """
    lines: list[dict] = []
    total_debits = ZERO
    total_credits = ZERO

    mapped_accounts = _payment_mapped_accounts(order)
    first_payment_idx = None

    for payment in order.payments.all():
        amount = _money(payment.amount)
        if amount == 0:
            continue

        account = get_payment_account(
            payment_method=payment.payment_method,
            config=config,
            mapped_accounts=mapped_accounts,
        )
        if first_payment_idx is None:
            first_payment_idx = len(lines)

        lines.append(
            {
                "account": account,
                "debit": amount,
                "credit": None,
                "description": f"POS Payment - {payment.payment_method.name}",
            }
        )
        total_debits += amount

    for item in order.items.all():
        amount = _money(item.line_total)
        if amount == 0:
            continue

        lines.append(
            {
                "account": sales_accounts[item.pk],
                "debit": None,
                "credit": amount,
                "description": f"Sales - {item.menu_item.name}",
            }
        )
        total_credits += amount

    tax = _money(order.tax)
    if tax > 0:
        lines.append(
            {
                "account": config.sales_tax_account,
                "debit": None,
                "credit": tax,
                "description": "Sales Tax",
            }
        )
        total_credits += tax

    discount_value = _money(order.discount_value)
    if discount_value > 0:
        lines.append(
            {
                "account": get_discount_account(discount=order.discount, config=config),
                "debit": discount_value,
                "credit": None,
                "description": "Sales Discount",
            }
        )
        total_debits += discount_value

    if total_debits != total_credits:
        if first_payment_idx is None:
            raise UnbalancedEntryError(
                total_debits=total_debits, total_credits=total_credits
            )

        adjustment = total_credits - total_debits
        if lines[first_payment_idx]["debit"] + adjustment <= 0:
            raise UnbalancedEntryError(
                total_debits=total_debits, total_credits=total_credits
            )

        lines[first_payment_idx]["debit"] += adjustment
        total_debits += adjustment

        logger.warning(
            "Balance adjustment applied to first payment line",
            extra={"order_id": str(order.id), "adjustment": str(adjustment)},
        )

    return lines, total_debits, total_credits


def _link_documents(*, order, ar_invoice, journal_entry) -> None:
    order.ar_invoice = ar_invoice
    order.journal_entry = journal_entry

    try:
        with transaction.atomic():
            order.save(update_fields=["ar_invoice", "journal_entry", "updated_at"])
    except IntegrityError as exc:
        raise AlreadyPostedError("This order has already been posted to the GL.") from exc

    if ar_invoice is not None:
        ar_invoice.journal_entry = journal_entry
        ar_invoice.save(update_fields=["journal_entry"])


# --------------------------------------------------
# ENTRY POINT
# --------------------------------------------------


@transaction.atomic
def post_order_to_gl(order, *, author=None) -> PostingResult:
    """
    Post a PAID POS order to the general ledger.

    Safe against partial failure and double-posting: a second call (or a
    concurrent one) fails with AlreadyPostedError.
    """
    _validate_preconditions(order)

    # Re-check on the locked row: concurrent callers serialize here.
    order = _lock_order(order.pk)
    _validate_preconditions(order)

    config = _validate_configuration(load_configuration(order.business_unit_id))

    posting_date = timezone.localdate()
    _validate_period(business_unit_id=order.business_unit_id, posting_date=posting_date)

    sales_accounts = _resolve_sales_accounts(order=order, config=config)

    ar_invoice = None
    if config.auto_create_ar_invoice:
        ar_invoice = _create_ar_invoice(
            order=order,
            config=config,
            posting_date=posting_date,
            sales_accounts=sales_accounts,
        )

    je_doc_num = allocate_doc_num(config.journal_entry_series_id)

    lines, total_debits, total_credits = build_journal_lines(
        order=order, config=config, sales_accounts=sales_accounts
    )

    journal_entry = create_journal_entry(
        business_unit=order.business_unit,
        doc_num=je_doc_num,
        lines=lines,
        remarks=f"Journal Entry for POS Order #{order.id}",
        posting_date=posting_date,
        author=order.user or author,
    )

    cogs_total = post_order_cogs(journal_entry=journal_entry, order=order)

    _link_documents(order=order, ar_invoice=ar_invoice, journal_entry=journal_entry)

    logger.info(
        "POS order posted to GL",
        extra={
            "order_id": str(order.id),
            "business_unit_id": str(order.business_unit_id),
            "journal_entry_id": str(journal_entry.id),
            "doc_num": journal_entry.doc_num,
            "ar_invoice_id": str(ar_invoice.id) if ar_invoice else None,
            "total": str(total_debits),
        },
    )

    return PostingResult(
        journal_entry=journal_entry,
        ar_invoice=ar_invoice,
        total_debits=total_debits,
        total_credits=total_credits,
        cogs_total=cogs_total,
    )
