# accounting/tests/test_commands.py

from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from accounting.models import AccountingPeriod, GlAccount, JournalEntry, NumberingSeries
from business_units.models import BusinessUnit
from pos.models import Order, PosConfiguration
from pos.tests.factories import build_ledger_setup, make_order
from sales.models import BusinessPartner


def _run(*args, **kwargs):
    out, err = StringIO(), StringIO()
    call_command(*args, stdout=out, stderr=err, **kwargs)
    return out.getvalue(), err.getvalue()


class SeedPosAccountingCommandTests(TestCase):
    def test_seed_creates_a_postable_business_unit(self):
        out, _ = _run("seed_pos_accounting", "--business-unit", "rest1")

        bu = BusinessUnit.objects.get(code="REST1")
        self.assertIn("POS accounting seeded for REST1", out)
        self.assertEqual(GlAccount.objects.filter(business_unit=bu).count(), 11)
        self.assertEqual(NumberingSeries.objects.filter(business_unit=bu).count(), 10)
        self.assertTrue(AccountingPeriod.objects.filter(business_unit=bu, status="OPEN").exists())
        self.assertTrue(BusinessPartner.objects.filter(business_unit=bu, bp_code="WALK-IN-CUSTOMER").exists())

        config = PosConfiguration.objects.get(business_unit=bu)
        self.assertTrue(config.auto_post_to_gl)
        self.assertEqual(config.journal_entry_series.prefix, "JE-REST1-")
        self.assertEqual(config.sales_tax_account.account_code, "2100")

    def test_seed_is_idempotent(self):
        _run("seed_pos_accounting", "--business-unit", "REST1")
        _run("seed_pos_accounting", "--business-unit", "REST1")

        bu = BusinessUnit.objects.get(code="REST1")
        self.assertEqual(GlAccount.objects.filter(business_unit=bu).count(), 11)
        self.assertEqual(AccountingPeriod.objects.filter(business_unit=bu).count(), 1)
        self.assertEqual(PosConfiguration.objects.filter(business_unit=bu).count(), 1)


class ValidatePosConfigurationCommandTests(TestCase):
    def setUp(self):
        self.setup = build_ledger_setup()

    def test_clean_setup_passes_strict(self):
        out, _ = _run("validate_pos_configuration", "--strict")
        self.assertIn("VALIDATION PASSED", out)

    def test_unposted_paid_order_fails_strict(self):
        make_order(
            self.setup.business_unit,
            items=[(self.setup.soda, 1, "2.50")],
            payments=[(self.setup.cash, "2.50")],
            status=Order.STATUS_PAID,
        )

        with self.assertRaises(SystemExit):
            _run("validate_pos_configuration", "--business-unit", "MAIN", "--strict")

    def test_issues_are_reported_without_strict(self):
        self.setup.config.journal_entry_series = None
        self.setup.config.save()

        _, err = _run("validate_pos_configuration")
        self.assertIn("Journal entry numbering series not configured", err)


class SyncPosToLedgerCommandTests(TestCase):
    def setUp(self):
        self.setup = build_ledger_setup()

    def _paid(self):
        return make_order(
            self.setup.business_unit,
            items=[(self.setup.soda, 1, "2.50")],
            payments=[(self.setup.cash, "2.50")],
            status=Order.STATUS_PAID,
        )

    def test_posts_unposted_paid_orders(self):
        first, second = self._paid(), self._paid()

        out, _ = _run("sync_pos_to_ledger", "--business-unit", "MAIN")

        self.assertIn("Orders posted:   2", out)
        for order in (first, second):
            order.refresh_from_db()
            self.assertIsNotNone(order.journal_entry_id)

        # second run has nothing left to do
        out, _ = _run("sync_pos_to_ledger")
        self.assertIn("Orders posted:   0", out)

    def test_dry_run_writes_nothing(self):
        self._paid()

        out, _ = _run("sync_pos_to_ledger", "--dry-run")

        self.assertIn("DRY RUN", out)
        self.assertEqual(JournalEntry.objects.count(), 0)

    def test_failures_are_counted_and_exit_non_zero(self):
        self._paid()
        self.setup.config.auto_post_to_gl = False
        self.setup.config.save()

        with self.assertRaises(SystemExit):
            _run("sync_pos_to_ledger")
        self.assertEqual(JournalEntry.objects.count(), 0)
