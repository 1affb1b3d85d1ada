# accounting/models/journal_line.py

"""
======================================================
PATH: accounting/models/journal_line.py
======================================================
JOURNAL ENTRY LINE MODEL

One debit OR credit posting to a single GL account.

Guarantees:
- Immutable once created (no updates, no deletes)
- Exactly one of debit / credit is populated, and it is > 0
- line_no preserves the order lines were built in
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.gl_account import GlAccount
from accounting.models.journal import JournalEntry


class JournalEntryLine(models.Model):
    journal_entry = models.ForeignKey(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name="lines",
    )

    line_no = models.PositiveIntegerField()

    gl_account = models.ForeignKey(
        GlAccount,
        on_delete=models.PROTECT,
        related_name="journal_lines",
    )

    debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
    )

    credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
    )

    description = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Journal Entry Line"
        verbose_name_plural = "Journal Entry Lines"
        ordering = ["journal_entry", "line_no"]
        indexes = [
            models.Index(fields=["gl_account"], name="accounting__gl_acco_7e5f21_idx"),
            models.Index(fields=["journal_entry", "line_no"], name="accounting__journal_c38b96_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["journal_entry", "line_no"],
                name="uniq_journal_line_entry_line_no",
            ),
            models.CheckConstraint(
                condition=(
                    Q(debit__isnull=False, debit__gt=0, credit__isnull=True)
                    | Q(credit__isnull=False, credit__gt=0, debit__isnull=True)
                ),
                name="chk_journal_line_debit_xor_credit",
            ),
        ]

    def __str__(self):
        if self.debit is not None:
            return f"DR {self.debit} → {self.gl_account}"
        return f"CR {self.credit} → {self.gl_account}"

    @property
    def signed_amount(self) -> Decimal:
        if self.debit is not None:
            return self.debit
        return -(self.credit or Decimal("0.00"))

    def clean(self):
        if self.debit is not None and self.credit is not None:
            raise ValidationError("A journal line cannot have both debit and credit")

        if self.debit is None and self.credit is None:
            raise ValidationError("A journal line must have either debit or credit")

        amount = self.debit if self.debit is not None else self.credit
        if amount <= 0:
            raise ValidationError("Journal line amount must be > 0")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntryLine records are immutable and cannot be modified")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntryLine records are immutable and cannot be deleted")
