# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (ACCOUNTING ENGINE)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalEntryLine
- Enforce debit == credit (exactly, zero tolerance)
- Guarantee atomicity
- Enforce period locks (no posting into closed periods)

Everything else (POS posting, COGS) must pass through here.

Line format (input):
    {"account": <GlAccount>, "debit": <Decimal|None>, "credit": <Decimal|None>,
     "description": "..."}

ANTI-CIRCULAR-IMPORT RULE:
- Do NOT import period_lock at module import time.
- Import it lazily inside the enforcement function.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalEntryLine
from accounting.services.exceptions import (
    JournalEntryCreationError,
    UnbalancedEntryError,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
MIN_LINE_AMOUNT = Decimal("0.01")


def _money(value) -> Decimal:
    if value is None or value == "":
        return Decimal("0.00")

    if isinstance(value, Decimal):
        amt = value
    else:
        try:
            amt = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError) as exc:
            raise JournalEntryCreationError(f"Invalid money value: {value!r}") from exc

    return amt.quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _normalize_lines(*, lines: list, business_unit_id) -> tuple[list[dict], Decimal, Decimal]:
    total_debits = Decimal("0.00")
    total_credits = Decimal("0.00")
    normalized: list[dict] = []

    for line in lines:
        if not isinstance(line, dict):
            raise JournalEntryCreationError("Each journal line must be an object/dict")

        account = line.get("account")
        if account is None:
            raise JournalEntryCreationError("Journal line missing account")

        if not getattr(account, "is_active", True):
            raise JournalEntryCreationError(
                f"Account {getattr(account, 'account_code', 'UNKNOWN')} is inactive"
            )

        if account.business_unit_id != business_unit_id:
            raise JournalEntryCreationError(
                f"Account {account.account_code} belongs to another business unit. "
                "Cross-business-unit journal entries are not allowed."
            )

        debit = _money(line.get("debit"))
        credit = _money(line.get("credit"))

        if debit < 0 or credit < 0:
            raise JournalEntryCreationError("Debit or credit cannot be negative")

        if debit > 0 and credit > 0:
            raise JournalEntryCreationError(
                "A journal line cannot have both debit and credit"
            )

        if debit == 0 and credit == 0:
            raise JournalEntryCreationError(
                "A journal line must have either debit or credit"
            )

        if debit > 0 and debit < MIN_LINE_AMOUNT:
            raise JournalEntryCreationError(f"Debit amount too small: {debit}")
        if credit > 0 and credit < MIN_LINE_AMOUNT:
            raise JournalEntryCreationError(f"Credit amount too small: {credit}")

        total_debits += debit
        total_credits += credit

        normalized.append(
            {
                "account": account,
                "debit": debit if debit > 0 else None,
                "credit": credit if credit > 0 else None,
                "description": (line.get("description") or "").strip()[:255],
            }
        )

    return normalized, total_debits, total_credits


def _enforce_period_lock(*, business_unit_id, posting_date: date) -> None:
    """
    Enforce accounting period locks for this business unit.

    IMPORTANT:
    - Lazy import to avoid circular imports during Django app loading.
    """
    from accounting.services.period_lock import PeriodLockedError, assert_period_open

    try:
        assert_period_open(business_unit_id=business_unit_id, posting_date=posting_date)
    except PeriodLockedError as exc:
        raise JournalEntryCreationError(str(exc)) from exc


def _build_line_rows(*, journal_entry: JournalEntry, normalized: list[dict], start_no: int):
    return [
        JournalEntryLine(
            journal_entry=journal_entry,
            line_no=start_no + offset,
            gl_account=line["account"],
            debit=line["debit"],
            credit=line["credit"],
            description=line["description"],
        )
        for offset, line in enumerate(normalized)
    ]


@transaction.atomic
def create_journal_entry(
    *,
    business_unit,
    doc_num: str,
    lines: list,
    remarks: str = "",
    posting_date: date | None = None,
    author=None,
) -> JournalEntry:
    if not lines:
        raise JournalEntryCreationError("Journal entry must contain at least one line")

    doc_num = (doc_num or "").strip()
    if not doc_num:
        raise JournalEntryCreationError("Journal entry doc_num is required")

    normalized, total_debits, total_credits = _normalize_lines(
        lines=lines, business_unit_id=business_unit.id
    )

    if total_debits != total_credits:
        raise UnbalancedEntryError(
            total_debits=total_debits, total_credits=total_credits
        )

    posting_date = posting_date or timezone.localdate()

    # Period lock enforcement (engine choke-point)
    _enforce_period_lock(business_unit_id=business_unit.id, posting_date=posting_date)

    if JournalEntry.objects.filter(business_unit=business_unit, doc_num=doc_num).exists():
        raise JournalEntryCreationError(
            f"Journal entry {doc_num} already exists for this business unit"
        )

    journal_entry = JournalEntry.objects.create(
        business_unit=business_unit,
        doc_num=doc_num,
        posting_date=posting_date,
        remarks=remarks,
        author=author,
        is_posted=True,
    )

    JournalEntryLine.objects.bulk_create(
        _build_line_rows(journal_entry=journal_entry, normalized=normalized, start_no=1)
    )

    logger.info(
        "Journal entry created",
        extra={
            "journal_entry_id": str(journal_entry.id),
            "doc_num": doc_num,
            "business_unit_id": str(business_unit.id),
            "total": str(total_debits),
        },
    )
    return journal_entry


@transaction.atomic
def append_journal_lines(*, journal_entry: JournalEntry, lines: list) -> list[JournalEntryLine]:
    """
    Append a self-balancing group of lines (e.g. COGS debit/credit pairs)
    to an existing journal entry. The entry stays balanced as a whole.
    """
    if not lines:
        return []

    normalized, total_debits, total_credits = _normalize_lines(
        lines=lines, business_unit_id=journal_entry.business_unit_id
    )

    if total_debits != total_credits:
        raise UnbalancedEntryError(
            total_debits=total_debits, total_credits=total_credits
        )

    last_no = (
        JournalEntryLine.objects.filter(journal_entry=journal_entry)
        .aggregate(m=Max("line_no"))
        .get("m")
        or 0
    )

    rows = _build_line_rows(
        journal_entry=journal_entry, normalized=normalized, start_no=last_no + 1
    )
    return JournalEntryLine.objects.bulk_create(rows)


def journal_totals(journal_entry: JournalEntry) -> tuple[Decimal, Decimal]:
    """(sum of debits, sum of credits) of a persisted journal entry."""
    total_debits = Decimal("0.00")
    total_credits = Decimal("0.00")
    for line in journal_entry.lines.all():
        total_debits += line.debit or Decimal("0.00")
        total_credits += line.credit or Decimal("0.00")
    return total_debits, total_credits
