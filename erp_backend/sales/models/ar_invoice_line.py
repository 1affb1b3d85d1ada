# sales/models/ar_invoice_line.py

from decimal import Decimal

from django.db import models


class ARInvoiceLine(models.Model):
    """
    Line of an AR invoice. Quantity and prices are snapshots of the source
    document (POS order item) at posting time.
    """

    invoice = models.ForeignKey(
        "sales.ARInvoice",
        on_delete=models.CASCADE,
        related_name="items",
    )

    line_no = models.PositiveIntegerField()

    description = models.CharField(max_length=255)

    quantity = models.DecimalField(
        max_digits=12, decimal_places=3, default=Decimal("1")
    )
    unit_price = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    line_total = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    gl_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        related_name="ar_invoice_lines",
    )

    class Meta:
        ordering = ["invoice", "line_no"]
        constraints = [
            models.UniqueConstraint(
                fields=["invoice", "line_no"],
                name="uniq_ar_invoice_line_invoice_line_no",
            ),
        ]

    def __str__(self):
        return f"{self.description} x {self.quantity} = {self.line_total}"
