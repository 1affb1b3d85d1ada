# pos/models/discount.py

from decimal import Decimal

from django.db import models


class Discount(models.Model):
    """
    Named discount applied to an order.

    gl_account overrides the configuration's default discount account.
    """

    business_unit = models.ForeignKey(
        "business_units.BusinessUnit",
        on_delete=models.PROTECT,
        related_name="discounts",
    )

    name = models.CharField(max_length=100)

    discount_value = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    gl_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )

    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.discount_value})"
