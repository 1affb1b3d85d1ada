"""
PATH: pos/models/configuration.py

POS CONFIGURATION MODEL

One row per business unit. Drives GL posting of completed orders:
- auto_post_to_gl / auto_create_ar_invoice switches
- numbering series for AR invoices and journal entries
- default GL accounts (revenue, tax, cash, discount)
- default walk-in customer code

Validated ahead of time by
accounting/services/pos_configuration_validator.py.
"""

from django.db import models

DEFAULT_WALK_IN_BP_CODE = "WALK-IN-CUSTOMER"


class PosConfiguration(models.Model):
    business_unit = models.OneToOneField(
        "business_units.BusinessUnit",
        on_delete=models.CASCADE,
        related_name="pos_configuration",
    )

    auto_post_to_gl = models.BooleanField(default=False)
    auto_create_ar_invoice = models.BooleanField(default=True)

    ar_invoice_series = models.ForeignKey(
        "accounting.NumberingSeries",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    journal_entry_series = models.ForeignKey(
        "accounting.NumberingSeries",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )

    sales_revenue_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
        help_text="Default revenue account for menu items without a GL mapping.",
    )
    sales_tax_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    cash_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
        help_text="Default debit account for payment methods without a GL mapping.",
    )
    discount_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )

    default_customer_bp_code = models.CharField(
        max_length=50,
        blank=True,
        default=DEFAULT_WALK_IN_BP_CODE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "POS Configuration"
        verbose_name_plural = "POS Configurations"

    def __str__(self):
        return f"POS configuration – {self.business_unit}"
