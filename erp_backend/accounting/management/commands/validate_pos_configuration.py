# accounting/management/commands/validate_pos_configuration.py

from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db.models import Sum

from accounting.models import JournalEntry
from accounting.services.pos_configuration_validator import validate_pos_configuration
from business_units.models import BusinessUnit
from pos.models import Order


class Command(BaseCommand):
    help = "Validate POS → GL readiness per business unit (configuration, unposted orders, journal balance)."

    def add_arguments(self, parser):
        parser.add_argument("--business-unit", dest="bu_code", help="Business unit code (optional)")
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any problem is found.",
        )

    def handle(self, *args, **options):
        strict = bool(options.get("strict"))

        units = BusinessUnit.objects.filter(is_active=True)
        if options.get("bu_code"):
            units = units.filter(code=options["bu_code"].strip().upper())
            if not units.exists():
                raise CommandError(f"Business unit not found: {options['bu_code']}")

        self.stdout.write(self.style.MIGRATE_HEADING("POS → GL Validation"))

        problems = 0
        for bu in units:
            problems += self._check_unit(bu)

        self.stdout.write("")
        if problems == 0:
            self.stdout.write(self.style.SUCCESS("✅ VALIDATION PASSED"))
        else:
            self.stderr.write(self.style.ERROR(f"❌ VALIDATION FOUND ISSUES: {problems} problem(s)"))

        if strict and problems:
            raise SystemExit(1)

    def _check_unit(self, bu) -> int:
        self.stdout.write("")
        self.stdout.write(self.style.MIGRATE_LABEL(str(bu)))
        problems = 0

        # -----------------------------
        # 1) Configuration
        # -----------------------------
        result = validate_pos_configuration(bu.id)
        for issue in result.issues:
            self.stderr.write(self.style.ERROR(f"[FAIL] {issue}"))
        for warning in result.warnings:
            self.stdout.write(self.style.WARNING(f"[WARN] {warning}"))
        if result.is_valid:
            self.stdout.write(self.style.SUCCESS("[OK] POS configuration"))
        problems += len(result.issues)

        # -----------------------------
        # 2) PAID orders never posted
        # -----------------------------
        unposted = Order.objects.filter(
            business_unit=bu,
            status=Order.STATUS_PAID,
            journal_entry__isnull=True,
        )
        unposted_count = unposted.count()
        if unposted_count:
            problems += unposted_count
            sample = ", ".join(str(i) for i in unposted.values_list("id", flat=True)[:10])
            self.stderr.write(self.style.ERROR(f"[FAIL] Paid orders without journal entry: {unposted_count}"))
            self.stderr.write(f"  Example IDs: {sample}")
            self.stderr.write("  Run: manage.py sync_pos_to_ledger --business-unit " + (bu.code or ""))
        else:
            self.stdout.write(self.style.SUCCESS("[OK] Every paid order is posted"))

        # -----------------------------
        # 3) Journal entries balance
        # -----------------------------
        entries = JournalEntry.objects.filter(business_unit=bu).annotate(
            debits=Sum("lines__debit", default=Decimal("0.00")),
            credits=Sum("lines__credit", default=Decimal("0.00")),
        )
        unbalanced = [je for je in entries if je.debits != je.credits]
        if unbalanced:
            problems += len(unbalanced)
            self.stderr.write(self.style.ERROR(f"[FAIL] Unbalanced journal entries: {len(unbalanced)}"))
            for je in unbalanced[:10]:
                self.stderr.write(f"  {je.doc_num}: debits={je.debits} credits={je.credits}")
        else:
            self.stdout.write(self.style.SUCCESS(f"[OK] Journal entries balanced ({entries.count()})"))

        empty = JournalEntry.objects.filter(business_unit=bu, lines__isnull=True).count()
        if empty:
            problems += empty
            self.stderr.write(self.style.ERROR(f"[FAIL] Journal entries without lines: {empty}"))

        return problems
