# accounting/management/commands/seed_pos_accounting.py

from __future__ import annotations

import calendar

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from accounting.models import AccountingPeriod, GlAccount, NumberingSeries
from business_units.models import BusinessUnit
from pos.models import PaymentMethod, PaymentMethodGlMapping, PosConfiguration
from sales.services.business_partner_service import ensure_walk_in_customer, walk_in_bp_code

ACCOUNTS = [
    ("1000", "Cash", GlAccount.ASSET),
    ("1010", "Bank", GlAccount.ASSET),
    ("1100", "Accounts Receivable", GlAccount.ASSET),
    ("1200", "Inventory", GlAccount.ASSET),
    ("2000", "Accounts Payable", GlAccount.LIABILITY),
    ("2100", "Sales Tax Payable", GlAccount.LIABILITY),
    ("3000", "Owner's Equity", GlAccount.EQUITY),
    ("4000", "Sales Revenue", GlAccount.REVENUE),
    ("4050", "Sales Discounts", GlAccount.REVENUE),
    ("5000", "Cost of Goods Sold", GlAccount.EXPENSE),
    ("6000", "Operating Expenses", GlAccount.EXPENSE),
]

SERIES_PREFIXES = {
    NumberingSeries.DocumentType.SALES_ORDER: "SO",
    NumberingSeries.DocumentType.DELIVERY: "DN",
    NumberingSeries.DocumentType.AR_INVOICE: "AR",
    NumberingSeries.DocumentType.PURCHASE_REQUEST: "PR",
    NumberingSeries.DocumentType.PURCHASE_ORDER: "PO",
    NumberingSeries.DocumentType.GOODS_RECEIPT_PO: "GRPO",
    NumberingSeries.DocumentType.AP_INVOICE: "AP",
    NumberingSeries.DocumentType.JOURNAL_ENTRY: "JE",
    NumberingSeries.DocumentType.INCOMING_PAYMENT: "IP",
    NumberingSeries.DocumentType.OUTGOING_PAYMENT: "OP",
}


class Command(BaseCommand):
    help = "Seed GL accounts, numbering series, an open period and POS configuration for a business unit"

    def add_arguments(self, parser):
        parser.add_argument("--business-unit", dest="bu_code", required=True, help="Business unit code")
        parser.add_argument("--name", dest="bu_name", help="Business unit name (used when creating it)")

    @transaction.atomic
    def handle(self, *args, **options):
        code = (options["bu_code"] or "").strip().upper()
        if not code:
            raise CommandError("--business-unit must not be blank")

        bu, created = BusinessUnit.objects.get_or_create(
            code=code,
            defaults={"name": options.get("bu_name") or code},
        )
        self.stdout.write(f"Business unit {bu} ({'created' if created else 'existing'})")

        accounts = self._seed_accounts(bu)
        series = self._seed_series(bu)
        self._seed_period(bu)

        cash_method, _ = PaymentMethod.objects.get_or_create(name="Cash")
        PaymentMethodGlMapping.objects.get_or_create(
            payment_method=cash_method,
            business_unit=bu,
            defaults={"gl_account": accounts["1000"]},
        )

        config, config_created = PosConfiguration.objects.get_or_create(
            business_unit=bu,
            defaults={
                "auto_post_to_gl": True,
                "auto_create_ar_invoice": True,
                "default_customer_bp_code": walk_in_bp_code(),
            },
        )

        wanted = {
            "ar_invoice_series": series[NumberingSeries.DocumentType.AR_INVOICE],
            "journal_entry_series": series[NumberingSeries.DocumentType.JOURNAL_ENTRY],
            "sales_revenue_account": accounts["4000"],
            "sales_tax_account": accounts["2100"],
            "cash_account": accounts["1000"],
            "discount_account": accounts["4050"],
        }
        changed = [f for f, value in wanted.items() if getattr(config, f"{f}_id") is None]
        for field in changed:
            setattr(config, field, wanted[field])
        if changed:
            config.save()

        ensure_walk_in_customer(business_unit=bu, bp_code=config.default_customer_bp_code)

        self.stdout.write(
            self.style.SUCCESS(
                f"✅ POS accounting seeded for {code} "
                f"(configuration {'created' if config_created else 'updated' if changed else 'unchanged'})"
            )
        )

    def _seed_accounts(self, bu) -> dict:
        accounts = {}
        created_count = 0

        for account_code, name, account_type in ACCOUNTS:
            acc, acc_created = GlAccount.objects.get_or_create(
                business_unit=bu,
                account_code=account_code,
                defaults={"name": name, "account_type": account_type, "is_active": True},
            )
            if acc_created:
                created_count += 1
            accounts[account_code] = acc

        self.stdout.write(f"GL accounts: {created_count} created, {len(ACCOUNTS) - created_count} existing")
        return accounts

    def _seed_series(self, bu) -> dict:
        series = {}
        for doc_type, abbrev in SERIES_PREFIXES.items():
            obj, _ = NumberingSeries.objects.get_or_create(
                business_unit=bu,
                name=f"{doc_type.label} ({bu.code})",
                defaults={"document_type": doc_type, "prefix": f"{abbrev}-{bu.code}-"},
            )
            series[doc_type] = obj
        return series

    def _seed_period(self, bu) -> None:
        today = timezone.localdate()
        start = today.replace(day=1)
        end = today.replace(day=calendar.monthrange(today.year, today.month)[1])

        overlapping = AccountingPeriod.objects.filter(
            business_unit=bu, start_date__lte=end, end_date__gte=start
        )
        if overlapping.exists():
            self.stdout.write(f"Accounting period covering {start:%Y-%m} already exists")
            return

        AccountingPeriod.objects.create(
            business_unit=bu,
            name=start.strftime("%Y-%m"),
            start_date=start,
            end_date=end,
            status=AccountingPeriod.Status.OPEN,
        )
        self.stdout.write(f"Accounting period {start:%Y-%m} opened")
