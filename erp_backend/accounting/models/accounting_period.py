# accounting/models/accounting_period.py

"""
======================================================
PATH: accounting/models/accounting_period.py
======================================================
ACCOUNTING PERIOD MODEL

A dated window of a business unit's books (usually one month).

Hard rules:
- end_date >= start_date
- A business unit cannot have overlapping periods.
- POS posting requires an OPEN period covering today; posting into a
  CLOSED period is refused (see accounting/services/period_lock.py).
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

from business_units.models import BusinessUnit


class AccountingPeriod(models.Model):
    class Status(models.TextChoices):
        OPEN = "OPEN", "Open"
        CLOSED = "CLOSED", "Closed"

    business_unit = models.ForeignKey(
        BusinessUnit,
        on_delete=models.PROTECT,
        related_name="accounting_periods",
    )

    name = models.CharField(max_length=100)

    start_date = models.DateField()
    end_date = models.DateField()

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.OPEN,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_date"]
        indexes = [
            models.Index(fields=["business_unit", "status"], name="accounting__busines_5c90e2_idx"),
            models.Index(fields=["business_unit", "start_date", "end_date"], name="accounting__busines_e4a871_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "start_date", "end_date"],
                name="uniq_accounting_period_bu_start_end",
            ),
            models.CheckConstraint(
                condition=Q(end_date__gte=F("start_date")),
                name="chk_accounting_period_end_gte_start",
            ),
        ]
        verbose_name = "Accounting Period"
        verbose_name_plural = "Accounting Periods"

    def __str__(self):
        return f"{self.name} {self.start_date} → {self.end_date} ({self.status})"

    @property
    def is_open(self) -> bool:
        return self.status == self.Status.OPEN

    def contains(self, day) -> bool:
        return self.start_date <= day <= self.end_date

    def clean(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError({"end_date": "end_date must be >= start_date"})

        if self.business_unit_id and self.start_date and self.end_date:
            qs = AccountingPeriod.objects.filter(
                business_unit_id=self.business_unit_id,
                start_date__lte=self.end_date,
                end_date__gte=self.start_date,
            )
            if self.pk:
                qs = qs.exclude(pk=self.pk)

            if qs.exists():
                raise ValidationError(
                    {
                        "start_date": "This period overlaps an existing period for this business unit.",
                        "end_date": "This period overlaps an existing period for this business unit.",
                    }
                )

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
