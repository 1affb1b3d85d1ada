# accounting/services/period_lock.py

"""
======================================================
PATH: accounting/services/period_lock.py
======================================================
PERIOD LOCK GUARD

Purpose:
- Prevent posting ANY journal entry whose posting date falls inside a
  CLOSED accounting period of the business unit.
- Find the OPEN period covering a date (configuration validator, POS posting).

Design:
- Thin, reusable guard
- Called by journal_entry_service (engine choke-point) and by the POS
  posting engine before any document number is allocated
"""

from __future__ import annotations

from datetime import date, datetime

from django.utils import timezone

from accounting.models.accounting_period import AccountingPeriod


class PeriodLockedError(ValueError):
    """Raised when attempting to post into a closed accounting period."""


def _to_date(value: datetime | date | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            value = timezone.make_aware(value, timezone.get_current_timezone())
        return timezone.localtime(value).date()
    return value


def find_open_period(*, business_unit_id, on_date: date | None = None):
    """OPEN period of the business unit whose range contains on_date (default today)."""
    day = _to_date(on_date) or timezone.localdate()
    return (
        AccountingPeriod.objects.filter(
            business_unit_id=business_unit_id,
            status=AccountingPeriod.Status.OPEN,
            start_date__lte=day,
            end_date__gte=day,
        )
        .order_by("start_date")
        .first()
    )


def assert_period_open(*, business_unit_id, posting_date: datetime | date | None) -> None:
    """
    Assert that posting_date does NOT fall inside a closed period.

    Raises:
        PeriodLockedError if the date is locked.
    """
    post_date = _to_date(posting_date)
    if post_date is None:
        return

    locked = AccountingPeriod.objects.filter(
        business_unit_id=business_unit_id,
        status=AccountingPeriod.Status.CLOSED,
        start_date__lte=post_date,
        end_date__gte=post_date,
    ).exists()

    if locked:
        raise PeriodLockedError(
            f"Posting blocked: {post_date} falls inside a closed accounting period."
        )
