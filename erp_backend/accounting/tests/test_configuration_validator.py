# accounting/tests/test_configuration_validator.py

from __future__ import annotations

from decimal import Decimal

from django.test import TestCase

from accounting.services.pos_configuration_validator import validate_pos_configuration
from pos.models import MenuItem, PaymentMethod, PosConfiguration
from pos.tests.factories import build_ledger_setup, make_business_unit


class ValidatePosConfigurationTests(TestCase):
    def setUp(self):
        self.setup = build_ledger_setup()
        self.bu = self.setup.business_unit
        self.config = self.setup.config

    def test_complete_setup_is_valid(self):
        result = validate_pos_configuration(self.bu.id)

        self.assertTrue(result.is_valid)
        self.assertEqual(result.issues, [])
        self.assertEqual(result.warnings, [])

    def test_missing_configuration_stops_early(self):
        other = make_business_unit(code="EMPTY", name="Empty")

        result = validate_pos_configuration(other.id)

        self.assertFalse(result.is_valid)
        self.assertEqual(result.issues, ["POS configuration not found"])
        self.assertEqual(result.warnings, [])

    def test_auto_post_requires_accounts_and_series(self):
        self.config.sales_revenue_account = None
        self.config.sales_tax_account = None
        self.config.journal_entry_series = None
        self.config.save()

        result = validate_pos_configuration(self.bu.id)

        self.assertIn("Default sales revenue account not configured", result.issues)
        self.assertIn("Sales tax account not configured", result.issues)
        self.assertIn("Journal entry numbering series not configured", result.issues)

    def test_missing_cash_account_is_only_a_warning(self):
        self.config.cash_account = None
        self.config.save()

        result = validate_pos_configuration(self.bu.id)

        self.assertTrue(result.is_valid)
        self.assertIn(
            "Default cash account not configured (payment method mappings will be used)",
            result.warnings,
        )

    def test_ar_series_required_when_creating_invoices(self):
        self.config.ar_invoice_series = None
        self.config.save()

        result = validate_pos_configuration(self.bu.id)
        self.assertIn("AR invoice numbering series not configured", result.issues)

    def test_unmapped_menu_items_warn_when_default_exists(self):
        MenuItem.objects.create(business_unit=self.bu, name="Fries", price=Decimal("3.00"))
        MenuItem.objects.create(business_unit=self.bu, name="Salad", price=Decimal("6.00"))

        result = validate_pos_configuration(self.bu.id)

        self.assertTrue(result.is_valid)
        self.assertIn("2 menu items missing GL mappings (will use default)", result.warnings)

    def test_unmapped_menu_items_block_without_default(self):
        self.config.sales_revenue_account = None
        self.config.save()
        MenuItem.objects.create(business_unit=self.bu, name="Fries", price=Decimal("3.00"))

        result = validate_pos_configuration(self.bu.id)
        self.assertIn("1 menu items missing GL mappings", result.issues)

    def test_unmapped_payment_methods(self):
        PaymentMethod.objects.create(name="Voucher")

        result = validate_pos_configuration(self.bu.id)
        self.assertIn("1 payment methods missing GL mappings (will use default)", result.warnings)

        self.config.cash_account = None
        self.config.save()

        result = validate_pos_configuration(self.bu.id)
        self.assertIn("1 payment methods missing GL mappings", result.issues)

    def test_no_open_period(self):
        self.setup.period.delete()

        result = validate_pos_configuration(self.bu.id)
        self.assertEqual(result.issues, ["No open accounting period found"])

    def test_auto_post_off_skips_posting_checks(self):
        self.setup.period.delete()
        self.config.auto_post_to_gl = False
        self.config.sales_tax_account = None
        self.config.save()

        result = validate_pos_configuration(self.bu.id)
        self.assertTrue(result.is_valid)

    def test_is_read_only(self):
        before = PosConfiguration.objects.get(pk=self.config.pk).updated_at

        validate_pos_configuration(self.bu.id)
        validate_pos_configuration(self.bu.id)

        self.assertEqual(PosConfiguration.objects.get(pk=self.config.pk).updated_at, before)
