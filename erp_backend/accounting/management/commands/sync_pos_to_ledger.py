# accounting/management/commands/sync_pos_to_ledger.py

from __future__ import annotations

from datetime import datetime, timedelta

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand
from django.utils import timezone

from accounting.services.exceptions import AccountingServiceError
from accounting.services.pos_accounting_service import post_order_to_gl
from pos.models import Order


def _parse_date(s: str | None):
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


def _bounds(date_from, date_to):
    tz = timezone.get_current_timezone()

    if date_from and not date_to:
        date_to = date_from
    if date_to and not date_from:
        date_from = date_to
    if not date_from and not date_to:
        return None, None

    start = timezone.make_aware(datetime.combine(date_from, datetime.min.time()), tz)
    end = timezone.make_aware(datetime.combine(date_to, datetime.min.time()), tz) + timedelta(days=1)
    return start, end


class Command(BaseCommand):
    help = "Post PAID POS orders that have no journal entry yet (reconciliation path)."

    def add_arguments(self, parser):
        parser.add_argument("--business-unit", dest="bu_code", help="Business unit code (optional)")
        parser.add_argument("--from", dest="date_from", help="Paid-at start date YYYY-MM-DD (optional)")
        parser.add_argument("--to", dest="date_to", help="Paid-at end date YYYY-MM-DD (optional)")
        parser.add_argument("--dry-run", action="store_true", help="Show actions without writing to DB")

    def handle(self, *args, **options):
        date_from = _parse_date(options.get("date_from"))
        date_to = _parse_date(options.get("date_to"))
        dry_run = bool(options.get("dry_run"))

        if options.get("date_from") and not date_from:
            self.stderr.write(self.style.ERROR("Invalid --from date. Use YYYY-MM-DD"))
            raise SystemExit(1)
        if options.get("date_to") and not date_to:
            self.stderr.write(self.style.ERROR("Invalid --to date. Use YYYY-MM-DD"))
            raise SystemExit(1)

        start, end = _bounds(date_from, date_to)

        orders = Order.objects.filter(
            status=Order.STATUS_PAID,
            journal_entry__isnull=True,
            ar_invoice__isnull=True,
        ).select_related("business_unit")

        if options.get("bu_code"):
            orders = orders.filter(business_unit__code=options["bu_code"].strip().upper())
        if start and end:
            orders = orders.filter(paid_at__gte=start, paid_at__lt=end)

        self.stdout.write(self.style.MIGRATE_HEADING("Sync POS → Ledger"))
        if start and end:
            self.stdout.write(f"Window: {start.isoformat()} → {end.isoformat()}")
        else:
            self.stdout.write("Window: ALL TIME")
        self.stdout.write(f"Unposted paid orders: {orders.count()}")

        if dry_run:
            self.stdout.write("DRY RUN: no database changes will be saved.\n")

        posted = 0
        failed = 0
        errors: list[str] = []

        for order in orders.order_by("paid_at").iterator():
            self.stdout.write(f"POST ORDER {order.id} ({order.business_unit})")

            if dry_run:
                posted += 1
                continue

            # post_order_to_gl is atomic per order
            try:
                result = post_order_to_gl(order)
            except (AccountingServiceError, ValidationError) as exc:
                failed += 1
                errors.append(f"ORDER {order.id}: {exc}")
                continue

            posted += 1
            self.stdout.write(f"  -> {result.journal_entry.doc_num}")

        self.stdout.write("\n--- Summary ---")
        self.stdout.write(f"Orders posted:   {posted}")
        self.stdout.write(f"Orders failed:   {failed}")

        if errors:
            self.stdout.write("\n--- Errors ---")
            for e in errors[:50]:
                self.stdout.write(f"- {e}")
            if len(errors) > 50:
                self.stdout.write(f"... ({len(errors) - 50} more)")

            if not dry_run:
                raise SystemExit(2)
