# accounting/services/numbering_service.py

"""
======================================================
PATH: accounting/services/numbering_service.py
======================================================
NUMBERING SERVICE (DOCUMENT NUMBER ALLOCATION)

Issues the next document number of a NumberingSeries:
    prefix + next_number (before increment), zero-padded to 6 digits

Guarantees:
- The series row is locked (select_for_update) before read-modify-write,
  so concurrent allocations never return the same number.
- Runs inside the caller's transaction (transaction.atomic joins it):
  a later failure in the same operation rolls the increment back.
- Gaps are possible only across concurrent transactions, never duplicates.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F

from accounting.models.numbering_series import NumberingSeries
from accounting.services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

DOC_NUM_PAD = 6


def format_doc_num(prefix: str | None, number: int) -> str:
    return f"{prefix or ''}{int(number):0{DOC_NUM_PAD}d}"


@transaction.atomic
def allocate_doc_num(series_id) -> str:
    """
    Allocate the next document number for a series.

    Raises:
        NotFoundError: series does not exist.
    """
    if series_id is None:
        raise NotFoundError("Numbering series not found: None")

    try:
        series = NumberingSeries.objects.select_for_update().get(pk=series_id)
    except (NumberingSeries.DoesNotExist, ValueError, TypeError) as exc:
        raise NotFoundError(f"Numbering series not found: {series_id}") from exc

    number = series.next_number

    NumberingSeries.objects.filter(pk=series.pk).update(
        next_number=F("next_number") + 1
    )

    doc_num = format_doc_num(series.prefix, number)

    logger.debug(
        "Allocated document number",
        extra={"series_id": series.pk, "doc_num": doc_num},
    )
    return doc_num
