# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Represents a single accounting transaction (journal header).

Guarantees:
- Immutable once created (no updates, no deletes)
- doc_num is unique per business unit (allocated from a NumberingSeries)
- posting_date is the accounting effective date (used for period locks)
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from business_units.models import BusinessUnit


class JournalEntry(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    business_unit = models.ForeignKey(
        BusinessUnit,
        on_delete=models.PROTECT,
        related_name="journal_entries",
    )

    doc_num = models.CharField(
        max_length=40,
        help_text="Document number allocated from the journal entry numbering series",
    )

    posting_date = models.DateField(
        default=timezone.localdate,
        help_text="Accounting effective date",
    )

    remarks = models.TextField(blank=True, default="")

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="journal_entries",
    )

    is_posted = models.BooleanField(
        default=True,
        help_text="Once posted, journal entries are immutable",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when the journal entry was created",
    )

    class Meta:
        ordering = ["-posting_date", "-created_at"]
        indexes = [
            models.Index(fields=["posting_date"], name="accounting__posting_0d6a33_idx"),
            models.Index(fields=["created_at"], name="accounting__created_91b2f7_idx"),
            models.Index(fields=["is_posted"], name="accounting__is_post_47ce05_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "doc_num"],
                name="uniq_journal_entry_bu_doc_num",
            )
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"JournalEntry {self.doc_num} – {self.posting_date}"

    def clean(self):
        self.doc_num = (self.doc_num or "").strip()
        if not self.doc_num:
            raise ValidationError("Journal entry doc_num is required")

        self.remarks = (self.remarks or "").strip()

    def save(self, *args, **kwargs):
        # UUID pk is populated before the first insert; _state tells us if the row exists.
        if not self._state.adding:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")
