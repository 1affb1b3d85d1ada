"""
PATH: pos/models/payment_method.py

PAYMENT METHODS

- PaymentMethod is shared across business units (Cash, Card, Transfer, ...)
- PaymentMethodGlMapping resolves, per business unit, which cash / bank /
  clearing account a payment is debited to
"""

from django.db import models


class PaymentMethod(models.Model):
    name = models.CharField(max_length=100, unique=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class PaymentMethodGlMapping(models.Model):
    payment_method = models.ForeignKey(
        PaymentMethod,
        on_delete=models.CASCADE,
        related_name="gl_mappings",
    )

    business_unit = models.ForeignKey(
        "business_units.BusinessUnit",
        on_delete=models.CASCADE,
        related_name="payment_method_gl_mappings",
    )

    gl_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        related_name="+",
    )

    class Meta:
        verbose_name = "Payment Method GL Mapping"
        verbose_name_plural = "Payment Method GL Mappings"
        constraints = [
            models.UniqueConstraint(
                fields=["payment_method", "business_unit"],
                name="uniq_payment_method_gl_mapping_bu",
            ),
        ]

    def __str__(self):
        return f"{self.payment_method} → {self.gl_account}"
