# accounting/tests/test_accounting_status.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.test import TestCase

from accounting.services.exceptions import NotFoundError
from accounting.services.pos_accounting_service import post_order_to_gl
from accounting.services.pos_accounting_status import (
    get_order_accounting_summary,
    get_orders_accounting_status,
)
from pos.models import Order
from pos.tests.factories import build_ledger_setup, make_order


class OrderAccountingSummaryTests(TestCase):
    def setUp(self):
        self.setup = build_ledger_setup()
        self.bu = self.setup.business_unit

    def _paid_order(self):
        return make_order(
            self.bu,
            items=[(self.setup.soda, 2, "2.50")],
            tax=Decimal("0.40"),
            payments=[(self.setup.cash, "5.40")],
            status=Order.STATUS_PAID,
        )

    def test_posted_order_summary(self):
        order = self._paid_order()
        post_order_to_gl(order)

        summary = get_order_accounting_summary(order.id)

        self.assertEqual(summary["order_id"], str(order.id))
        self.assertEqual(summary["order_status"], Order.STATUS_PAID)
        self.assertTrue(summary["is_paid"])
        self.assertTrue(summary["is_posted_to_ar"])
        self.assertTrue(summary["is_posted_to_gl"])
        self.assertTrue(summary["is_journal_posted"])
        self.assertEqual(summary["ar_invoice_number"], "AR-MAIN-000001")
        self.assertEqual(summary["journal_entry_number"], "JE-MAIN-000001")
        self.assertEqual(
            summary["totals"],
            {"subtotal": "5.00", "tax": "0.40", "discount": "0.00", "total": "5.40"},
        )
        self.assertEqual(
            summary["journal_lines"][0],
            {
                "line_no": 1,
                "account_code": "1000",
                "account_name": "Cash",
                "debit": "5.40",
                "credit": None,
                "description": "POS Payment - Cash",
            },
        )
        self.assertEqual(len(summary["journal_lines"]), 3)
        self.assertEqual(summary["total_debits"], "5.40")
        self.assertEqual(summary["total_credits"], "5.40")

    def test_unposted_order_summary(self):
        order = self._paid_order()

        summary = get_order_accounting_summary(order.id)

        self.assertFalse(summary["is_posted_to_ar"])
        self.assertFalse(summary["is_posted_to_gl"])
        self.assertIsNone(summary["ar_invoice_number"])
        self.assertIsNone(summary["journal_entry_number"])
        self.assertEqual(summary["journal_lines"], [])
        self.assertEqual(summary["total_debits"], "0.00")

    def test_journal_falls_back_to_invoice_link(self):
        order = self._paid_order()
        result = post_order_to_gl(order)

        # AR-only link on the order row; journal still reachable via the invoice
        Order.objects.filter(pk=order.pk).update(journal_entry=None)

        summary = get_order_accounting_summary(order.id)
        self.assertTrue(summary["is_posted_to_gl"])
        self.assertEqual(summary["journal_entry_number"], result.journal_entry.doc_num)

    def test_unknown_order(self):
        with self.assertRaises(NotFoundError):
            get_order_accounting_summary(uuid.uuid4())

    def test_malformed_id(self):
        with self.assertRaises(NotFoundError):
            get_order_accounting_summary("not-a-uuid")


class OrdersAccountingStatusTests(TestCase):
    def setUp(self):
        self.setup = build_ledger_setup()
        self.bu = self.setup.business_unit

    def test_batch_status_keeps_input_order_and_omits_unknown(self):
        posted = make_order(
            self.bu,
            items=[(self.setup.soda, 1, "2.50")],
            payments=[(self.setup.cash, "2.50")],
            status=Order.STATUS_PAID,
        )
        post_order_to_gl(posted)
        open_order = make_order(self.bu, items=[(self.setup.soda, 1, "2.50")])

        rows = get_orders_accounting_status([open_order.id, uuid.uuid4(), str(posted.id), "junk"])

        self.assertEqual([r["order_id"] for r in rows], [str(open_order.id), str(posted.id)])

        self.assertEqual(rows[0]["order_status"], Order.STATUS_OPEN)
        self.assertFalse(rows[0]["is_posted_to_gl"])
        self.assertEqual(rows[0]["total_amount"], "2.50")

        self.assertTrue(rows[1]["is_posted_to_ar"])
        self.assertTrue(rows[1]["is_posted_to_gl"])
        self.assertEqual(rows[1]["journal_entry_number"], "JE-MAIN-000001")
        self.assertTrue(rows[1]["is_journal_posted"])

    def test_empty_input(self):
        self.assertEqual(get_orders_accounting_status([]), [])
        self.assertEqual(get_orders_accounting_status(None), [])
