# accounting/models/numbering_series.py

"""
======================================================
PATH: accounting/models/numbering_series.py
======================================================
NUMBERING SERIES MODEL

Per business unit, per document type counter used to number documents
(journal entries, AR invoices, ...).

Hard rules:
- next_number is only ever advanced by numbering_service.allocate_doc_num
  (row lock + F() increment inside the caller's transaction).
- next_number starts at 1 and never goes below it.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from business_units.models import BusinessUnit


class NumberingSeries(models.Model):
    class DocumentType(models.TextChoices):
        SALES_ORDER = "SALES_ORDER", "Sales Order"
        DELIVERY = "DELIVERY", "Delivery"
        AR_INVOICE = "AR_INVOICE", "A/R Invoice"
        PURCHASE_REQUEST = "PURCHASE_REQUEST", "Purchase Request"
        PURCHASE_ORDER = "PURCHASE_ORDER", "Purchase Order"
        GOODS_RECEIPT_PO = "GOODS_RECEIPT_PO", "Goods Receipt PO"
        AP_INVOICE = "AP_INVOICE", "A/P Invoice"
        JOURNAL_ENTRY = "JOURNAL_ENTRY", "Journal Entry"
        INCOMING_PAYMENT = "INCOMING_PAYMENT", "Incoming Payment"
        OUTGOING_PAYMENT = "OUTGOING_PAYMENT", "Outgoing Payment"

    business_unit = models.ForeignKey(
        BusinessUnit,
        on_delete=models.PROTECT,
        related_name="numbering_series",
    )

    name = models.CharField(max_length=100)

    document_type = models.CharField(
        max_length=32,
        choices=DocumentType.choices,
    )

    prefix = models.CharField(max_length=20, blank=True, default="")

    next_number = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["business_unit", "document_type", "name"]
        verbose_name = "Numbering Series"
        verbose_name_plural = "Numbering Series"
        indexes = [
            models.Index(fields=["business_unit", "document_type"], name="accounting__busines_3b7d10_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "name"],
                name="uniq_numbering_series_bu_name",
            ),
            models.CheckConstraint(
                condition=Q(next_number__gte=1),
                name="chk_numbering_series_next_number_gte_1",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.prefix}{self.next_number})"

    def clean(self):
        self.name = (self.name or "").strip()
        self.prefix = (self.prefix or "").strip()

        if not self.name:
            raise ValidationError("Numbering series name is required")
        if self.next_number is not None and self.next_number < 1:
            raise ValidationError({"next_number": "next_number must be >= 1"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
