# sales/models/ar_invoice.py

import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone


class ARInvoice(models.Model):
    """
    Accounts-receivable invoice.

    GUARANTEES:
    - doc_num is unique per business unit (allocated from the AR_INVOICE series)
    - POS-generated invoices are born CLOSED / SETTLED (paid at the till)
    - journal_entry back-link is set in the same transaction that created both
    """

    STATUS_OPEN = "OPEN"
    STATUS_CLOSED = "CLOSED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_OPEN, "Open"),
        (STATUS_CLOSED, "Closed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    SETTLEMENT_UNSETTLED = "UNSETTLED"
    SETTLEMENT_PARTIALLY_SETTLED = "PARTIALLY_SETTLED"
    SETTLEMENT_SETTLED = "SETTLED"

    SETTLEMENT_CHOICES = [
        (SETTLEMENT_UNSETTLED, "Unsettled"),
        (SETTLEMENT_PARTIALLY_SETTLED, "Partially settled"),
        (SETTLEMENT_SETTLED, "Settled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    business_unit = models.ForeignKey(
        "business_units.BusinessUnit",
        on_delete=models.PROTECT,
        related_name="ar_invoices",
    )

    doc_num = models.CharField(max_length=40)

    business_partner = models.ForeignKey(
        "sales.BusinessPartner",
        on_delete=models.PROTECT,
        related_name="ar_invoices",
    )

    posting_date = models.DateField(default=timezone.localdate)
    due_date = models.DateField(default=timezone.localdate)
    document_date = models.DateField(default=timezone.localdate)

    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    amount_paid = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_OPEN,
    )
    settlement_status = models.CharField(
        max_length=20,
        choices=SETTLEMENT_CHOICES,
        default=SETTLEMENT_UNSETTLED,
    )

    remarks = models.TextField(blank=True, default="")

    journal_entry = models.OneToOneField(
        "accounting.JournalEntry",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="ar_invoice",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-posting_date", "-created_at"]
        verbose_name = "A/R Invoice"
        verbose_name_plural = "A/R Invoices"
        indexes = [
            models.Index(fields=["posting_date"], name="sales_arinv_posting_4b1e2d_idx"),
            models.Index(fields=["status"], name="sales_arinv_status_9c0f13_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "doc_num"],
                name="uniq_ar_invoice_bu_doc_num",
            ),
        ]

    def __str__(self):
        return f"{self.doc_num} | {self.total_amount}"

    @property
    def balance_due(self) -> Decimal:
        return Decimal(self.total_amount) - Decimal(self.amount_paid)
