# accounting/tests/test_pos_posting.py

"""
POS → GL POSTING TESTS

Run with:
    python manage.py test accounting -v 2

Base scenario (see pos/tests/factories.py):
    2 x Burger @ 10.00 (revenue 4000, recipe bun 0.50 + patty 2.25)
    1 x Soda   @  2.50 (revenue 4010, no recipe)
    tax 1.80 -> total 24.30
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from accounting.models import AccountingPeriod, JournalEntry
from accounting.services.exceptions import (
    AlreadyPostedError,
    ConfigurationError,
    InvalidStateError,
    MissingGLMappingError,
    NotPaidError,
    UnbalancedEntryError,
)
from accounting.services.journal_entry_service import journal_totals
from accounting.services.pos_accounting_service import post_order_to_gl
from pos.models import Discount, MenuItem, Order, PaymentMethod
from sales.models import ARInvoice, BusinessPartner
from pos.tests.factories import build_ledger_setup, make_order

User = get_user_model()


def _lines(je):
    return [
        (l.line_no, l.gl_account.account_code, l.debit, l.credit, l.description)
        for l in je.lines.select_related("gl_account").order_by("line_no")
    ]


class PosPostingBaseTestCase(TestCase):
    def setUp(self):
        self.setup = build_ledger_setup()
        self.bu = self.setup.business_unit

    def _paid_order(self, *, payments=None, **kwargs):
        if payments is None:
            payments = [(self.setup.cash, "24.30")]
        kwargs.setdefault(
            "items",
            [(self.setup.burger, 2, "10.00"), (self.setup.soda, 1, "2.50")],
        )
        kwargs.setdefault("tax", Decimal("1.80"))
        return make_order(self.bu, payments=payments, status=Order.STATUS_PAID, **kwargs)


class PostOrderToGlTests(PosPostingBaseTestCase):
    def test_posts_balanced_entry_with_ar_invoice(self):
        order = self._paid_order()

        result = post_order_to_gl(order)

        je = result.journal_entry
        self.assertEqual(je.doc_num, "JE-MAIN-000001")
        self.assertEqual(je.remarks, f"Journal Entry for POS Order #{order.id}")
        self.assertTrue(je.is_posted)
        self.assertEqual(je.posting_date, timezone.localdate())

        self.assertEqual(
            _lines(je),
            [
                (1, "1000", Decimal("24.30"), None, "POS Payment - Cash"),
                (2, "4000", None, Decimal("20.00"), "Sales - Burger"),
                (3, "4010", None, Decimal("2.50"), "Sales - Soda"),
                (4, "2100", None, Decimal("1.80"), "Sales Tax"),
                (5, "5000", Decimal("5.50"), None, "COGS - Burger"),
                (6, "1200", None, Decimal("5.50"), "Inventory Depletion - Burger"),
            ],
        )
        self.assertEqual(journal_totals(je), (Decimal("29.80"), Decimal("29.80")))

        # Reported totals cover the sale only, not COGS.
        self.assertEqual(result.total_debits, Decimal("24.30"))
        self.assertEqual(result.total_credits, Decimal("24.30"))
        self.assertEqual(result.cogs_total, Decimal("5.50"))

    def test_ar_invoice_is_closed_settled_and_linked(self):
        order = self._paid_order()

        result = post_order_to_gl(order)
        invoice = result.ar_invoice

        self.assertEqual(invoice.doc_num, "AR-MAIN-000001")
        self.assertEqual(invoice.status, ARInvoice.STATUS_CLOSED)
        self.assertEqual(invoice.settlement_status, ARInvoice.SETTLEMENT_SETTLED)
        self.assertEqual(invoice.total_amount, Decimal("24.30"))
        self.assertEqual(invoice.amount_paid, Decimal("24.30"))
        self.assertEqual(invoice.remarks, f"AR Invoice for POS Order #{order.id}")
        self.assertEqual(invoice.business_partner.bp_code, "WALK-IN-CUSTOMER")
        self.assertEqual(invoice.items.count(), 2)

        order.refresh_from_db()
        invoice.refresh_from_db()
        self.assertEqual(order.ar_invoice_id, invoice.id)
        self.assertEqual(order.journal_entry_id, result.journal_entry.id)
        self.assertEqual(invoice.journal_entry_id, result.journal_entry.id)

    def test_ar_invoice_dates_and_paid_amount_come_from_order(self):
        order = self._paid_order()
        created = timezone.now() - timedelta(days=2)
        Order.objects.filter(pk=order.pk).update(
            created_at=created, amount_paid=Decimal("25.00")
        )
        order.refresh_from_db()

        invoice = post_order_to_gl(order).ar_invoice

        self.assertEqual(invoice.document_date, timezone.localtime(created).date())
        self.assertEqual(invoice.posting_date, timezone.localdate())
        self.assertEqual(invoice.amount_paid, Decimal("25.00"))
        self.assertEqual(invoice.total_amount, Decimal("24.30"))

    def test_as_dict_serializes_money_as_strings(self):
        result = post_order_to_gl(self._paid_order())
        payload = result.as_dict()

        self.assertEqual(payload["journal_entry_number"], "JE-MAIN-000001")
        self.assertEqual(payload["ar_invoice_number"], "AR-MAIN-000001")
        self.assertEqual(payload["total_debits"], "24.30")
        self.assertEqual(payload["total_credits"], "24.30")

    def test_without_ar_invoice(self):
        self.setup.config.auto_create_ar_invoice = False
        self.setup.config.save()

        result = post_order_to_gl(self._paid_order())

        self.assertIsNone(result.ar_invoice)
        self.assertEqual(ARInvoice.objects.count(), 0)
        self.setup.ar_series.refresh_from_db()
        self.assertEqual(self.setup.ar_series.next_number, 1)

    def test_existing_partner_is_used(self):
        partner = BusinessPartner.objects.create(
            business_unit=self.bu,
            bp_code="C-001",
            name="Regular",
            bp_type=BusinessPartner.TYPE_CUSTOMER,
        )
        result = post_order_to_gl(self._paid_order(business_partner=partner))
        self.assertEqual(result.ar_invoice.business_partner_id, partner.id)

    def test_author_defaults_to_order_cashier(self):
        cashier = User.objects.create_user(username="cashier", password="pass12345")
        result = post_order_to_gl(self._paid_order(user=cashier))
        self.assertEqual(result.journal_entry.author_id, cashier.id)

    def test_numbers_increase_per_order(self):
        first = post_order_to_gl(self._paid_order())
        second = post_order_to_gl(self._paid_order())

        self.assertEqual(first.journal_entry.doc_num, "JE-MAIN-000001")
        self.assertEqual(second.journal_entry.doc_num, "JE-MAIN-000002")
        self.assertEqual(second.ar_invoice.doc_num, "AR-MAIN-000002")


class PostingLineRulesTests(PosPostingBaseTestCase):
    def test_split_payments_one_line_each(self):
        order = self._paid_order(payments=[(self.setup.card, "10.00"), (self.setup.cash, "14.30")])

        je = post_order_to_gl(order).journal_entry
        lines = _lines(je)

        self.assertEqual(lines[0][1:], ("1010", Decimal("10.00"), None, "POS Payment - Card"))
        self.assertEqual(lines[1][1:], ("1000", Decimal("14.30"), None, "POS Payment - Cash"))

    def test_rounding_difference_goes_to_first_payment_line(self):
        order = self._paid_order(payments=[(self.setup.card, "10.00"), (self.setup.cash, "14.29")])

        result = post_order_to_gl(order)
        lines = _lines(result.journal_entry)

        self.assertEqual(lines[0][2], Decimal("10.01"))
        self.assertEqual(lines[1][2], Decimal("14.29"))
        # revenue untouched
        self.assertEqual(lines[2][3], Decimal("20.00"))
        self.assertEqual(result.total_debits, result.total_credits)

    def test_zero_amount_payment_is_skipped(self):
        order = self._paid_order(payments=[(self.setup.card, "0.00"), (self.setup.cash, "24.30")])

        lines = _lines(post_order_to_gl(order).journal_entry)

        self.assertEqual(lines[0][1:], ("1000", Decimal("24.30"), None, "POS Payment - Cash"))
        self.assertNotIn("POS Payment - Card", [l[4] for l in lines])

    def test_zero_tax_has_no_tax_line(self):
        order = self._paid_order(tax=Decimal("0.00"), payments=[(self.setup.cash, "22.50")])

        descriptions = [l[4] for l in _lines(post_order_to_gl(order).journal_entry)]
        self.assertNotIn("Sales Tax", descriptions)

    def test_discount_debits_configured_account(self):
        order = self._paid_order(
            discount_value=Decimal("2.00"),
            payments=[(self.setup.cash, "22.30")],
        )

        lines = _lines(post_order_to_gl(order).journal_entry)

        self.assertEqual(lines[0][1:3], ("1000", Decimal("22.30")))
        self.assertEqual(lines[4][1:], ("4050", Decimal("2.00"), None, "Sales Discount"))

    def test_discount_account_override(self):
        special = self.setup.accounts["drinks"]
        discount = Discount.objects.create(
            business_unit=self.bu, name="Promo", discount_value=Decimal("2.00"), gl_account=special
        )
        order = self._paid_order(
            discount=discount,
            discount_value=Decimal("2.00"),
            payments=[(self.setup.cash, "22.30")],
        )

        lines = _lines(post_order_to_gl(order).journal_entry)
        discount_line = [l for l in lines if l[4] == "Sales Discount"][0]
        self.assertEqual(discount_line[1], "4010")

    def _platter(self):
        return MenuItem.objects.create(business_unit=self.bu, name="Platter", price=Decimal("100.00"))

    def test_revenue_plus_tax_single_cash_payment(self):
        order = self._paid_order(
            items=[(self._platter(), 1, "100.00")],
            tax=Decimal("12.00"),
            payments=[(self.setup.cash, "112.00")],
        )

        result = post_order_to_gl(order)

        self.assertEqual(
            _lines(result.journal_entry),
            [
                (1, "1000", Decimal("112.00"), None, "POS Payment - Cash"),
                (2, "4000", None, Decimal("100.00"), "Sales - Platter"),
                (3, "2100", None, Decimal("12.00"), "Sales Tax"),
            ],
        )
        self.assertEqual(result.total_debits, Decimal("112.00"))
        self.assertEqual(result.total_credits, Decimal("112.00"))

    def test_revenue_less_discount_no_tax(self):
        order = self._paid_order(
            items=[(self._platter(), 1, "100.00")],
            tax=Decimal("0.00"),
            discount_value=Decimal("10.00"),
            payments=[(self.setup.cash, "90.00")],
        )

        result = post_order_to_gl(order)

        self.assertEqual(
            _lines(result.journal_entry),
            [
                (1, "1000", Decimal("90.00"), None, "POS Payment - Cash"),
                (2, "4000", None, Decimal("100.00"), "Sales - Platter"),
                (3, "4050", Decimal("10.00"), None, "Sales Discount"),
            ],
        )
        self.assertEqual(result.total_debits, Decimal("100.00"))
        self.assertEqual(result.total_credits, Decimal("100.00"))

    def test_unmapped_menu_item_uses_default_revenue(self):
        fries = MenuItem.objects.create(business_unit=self.bu, name="Fries", price=Decimal("3.00"))
        order = self._paid_order(items=[(fries, 1, "3.00")], tax=Decimal("0.00"), payments=[(self.setup.cash, "3.00")])

        lines = _lines(post_order_to_gl(order).journal_entry)
        self.assertEqual(lines[1][1:], ("4000", None, Decimal("3.00"), "Sales - Fries"))

    def test_unmapped_payment_method_uses_cash_account(self):
        voucher = PaymentMethod.objects.create(name="Voucher")
        order = self._paid_order(payments=[(voucher, "24.30")])

        lines = _lines(post_order_to_gl(order).journal_entry)
        self.assertEqual(lines[0][1:], ("1000", Decimal("24.30"), None, "POS Payment - Voucher"))


class PostingFailureTests(PosPostingBaseTestCase):
    def _assert_nothing_written(self):
        self.assertEqual(JournalEntry.objects.count(), 0)
        self.assertEqual(ARInvoice.objects.count(), 0)
        self.setup.ar_series.refresh_from_db()
        self.setup.je_series.refresh_from_db()
        self.assertEqual(self.setup.ar_series.next_number, 1)
        self.assertEqual(self.setup.je_series.next_number, 1)

    def test_none_order_rejected(self):
        with self.assertRaises(InvalidStateError) as ctx:
            post_order_to_gl(None)
        self.assertEqual(str(ctx.exception), "Order cannot be None")

    def test_unpaid_order_rejected(self):
        order = make_order(self.bu, items=[(self.setup.soda, 1, "2.50")])

        with self.assertRaises(NotPaidError) as ctx:
            post_order_to_gl(order)
        self.assertEqual(str(ctx.exception), "Only paid orders can be posted to the GL.")
        self._assert_nothing_written()

    def test_second_posting_rejected(self):
        order = self._paid_order()
        post_order_to_gl(order)

        with self.assertRaises(AlreadyPostedError) as ctx:
            post_order_to_gl(order)
        self.assertEqual(str(ctx.exception), "This order has already been posted to the GL.")

        # stale instance: re-check happens on the locked row
        stale = Order.objects.get(pk=order.pk)
        stale.journal_entry_id = None
        stale.ar_invoice_id = None
        with self.assertRaises(AlreadyPostedError):
            post_order_to_gl(stale)

        self.assertEqual(JournalEntry.objects.count(), 1)

    def test_missing_configuration(self):
        self.setup.config.delete()

        with self.assertRaises(ConfigurationError) as ctx:
            post_order_to_gl(self._paid_order())
        self.assertEqual(str(ctx.exception), "POS configuration not found")

    def test_auto_post_disabled(self):
        self.setup.config.auto_post_to_gl = False
        self.setup.config.save()

        with self.assertRaises(ConfigurationError) as ctx:
            post_order_to_gl(self._paid_order())
        self.assertEqual(
            str(ctx.exception),
            "Automatic GL posting is not enabled for this business unit.",
        )
        self._assert_nothing_written()

    def test_essential_configuration_missing(self):
        self.setup.config.sales_tax_account = None
        self.setup.config.save()

        with self.assertRaises(ConfigurationError) as ctx:
            post_order_to_gl(self._paid_order())
        self.assertEqual(
            str(ctx.exception),
            "Essential configuration (AR Series, JE Series, Sales Tax Account) is missing.",
        )
        self._assert_nothing_written()

    def test_missing_sales_account_names_item(self):
        self.setup.config.sales_revenue_account = None
        self.setup.config.save()
        fries = MenuItem.objects.create(business_unit=self.bu, name="Fries", price=Decimal("3.00"))

        order = self._paid_order(items=[(fries, 1, "3.00")], tax=Decimal("0.00"), payments=[(self.setup.cash, "3.00")])

        with self.assertRaises(MissingGLMappingError) as ctx:
            post_order_to_gl(order)
        self.assertEqual(str(ctx.exception), "Sales account not found for menu item: Fries")
        self._assert_nothing_written()

    def test_missing_payment_account_names_method(self):
        self.setup.config.cash_account = None
        self.setup.config.save()
        voucher = PaymentMethod.objects.create(name="Voucher")

        with self.assertRaises(MissingGLMappingError) as ctx:
            post_order_to_gl(self._paid_order(payments=[(voucher, "24.30")]))
        self.assertEqual(
            str(ctx.exception),
            "GL Account mapping not found for payment method: Voucher",
        )
        self._assert_nothing_written()

    def test_discount_without_account(self):
        self.setup.config.discount_account = None
        self.setup.config.save()

        order = self._paid_order(discount_value=Decimal("2.00"), payments=[(self.setup.cash, "22.30")])

        with self.assertRaises(ConfigurationError) as ctx:
            post_order_to_gl(order)
        self.assertEqual(str(ctx.exception), "Discount GL account is not configured.")
        self._assert_nothing_written()

    def test_no_payment_line_to_absorb_difference(self):
        order = self._paid_order(payments=[])

        with self.assertRaises(UnbalancedEntryError):
            post_order_to_gl(order)
        self._assert_nothing_written()

        order.refresh_from_db()
        self.assertIsNone(order.journal_entry_id)
        self.assertIsNone(order.ar_invoice_id)

    def test_overpayment_that_cannot_be_absorbed(self):
        order = self._paid_order(
            items=[(self.setup.soda, 1, "2.50")],
            tax=Decimal("0.00"),
            payments=[(self.setup.card, "1.00"), (self.setup.cash, "5.00")],
        )

        with self.assertRaises(UnbalancedEntryError) as ctx:
            post_order_to_gl(order)
        self.assertEqual(ctx.exception.total_debits, Decimal("6.00"))
        self.assertEqual(ctx.exception.total_credits, Decimal("2.50"))
        self.assertEqual(
            str(ctx.exception),
            "Journal entry is unbalanced. Debits: 6.00, Credits: 2.50",
        )
        self._assert_nothing_written()

    def test_no_open_period_blocks_before_allocation(self):
        self.setup.period.delete()
        self.assertEqual(AccountingPeriod.objects.count(), 0)

        with self.assertRaises(ConfigurationError) as ctx:
            post_order_to_gl(self._paid_order())
        self.assertEqual(str(ctx.exception), "No open accounting period found")
        self._assert_nothing_written()

    def test_closed_period_blocks_before_allocation(self):
        self.setup.period.delete()
        today = timezone.localdate()
        AccountingPeriod.objects.create(
            business_unit=self.bu,
            name="Locked",
            start_date=today,
            end_date=today,
            status=AccountingPeriod.Status.CLOSED,
        )

        with self.assertRaises(ConfigurationError):
            post_order_to_gl(self._paid_order())
        self._assert_nothing_written()


class CogsPostingTests(TestCase):
    def test_no_cogs_lines_without_cogs_mapping(self):
        setup = build_ledger_setup(with_cogs=False)
        order = make_order(
            setup.business_unit,
            items=[(setup.burger, 1, "10.00")],
            payments=[(setup.cash, "10.00")],
            status=Order.STATUS_PAID,
        )

        result = post_order_to_gl(order)

        self.assertEqual(result.cogs_total, Decimal("0.00"))
        self.assertEqual(result.journal_entry.lines.count(), 2)

    def test_missing_standard_cost_is_zero(self):
        setup = build_ledger_setup()
        for recipe_item in setup.burger.recipe.recipe_items.all():
            recipe_item.inventory_item.standard_cost = None
            recipe_item.inventory_item.save()

        order = make_order(
            setup.business_unit,
            items=[(setup.burger, 1, "10.00")],
            payments=[(setup.cash, "10.00")],
            status=Order.STATUS_PAID,
        )

        result = post_order_to_gl(order)
        self.assertEqual(result.cogs_total, Decimal("0.00"))
        self.assertFalse(result.journal_entry.lines.filter(description__startswith="COGS").exists())

    def test_cogs_scales_with_quantity(self):
        setup = build_ledger_setup()
        order = make_order(
            setup.business_unit,
            items=[(setup.burger, 3, "10.00")],
            payments=[(setup.cash, "30.00")],
            status=Order.STATUS_PAID,
        )

        result = post_order_to_gl(order)

        # 3 x (0.50 + 2.25)
        self.assertEqual(result.cogs_total, Decimal("8.25"))
        cogs_line = result.journal_entry.lines.get(description="COGS - Burger")
        self.assertEqual(cogs_line.debit, Decimal("8.25"))
        self.assertEqual(cogs_line.gl_account.account_code, "5000")
