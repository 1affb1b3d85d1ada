# sales/models/business_partner.py

import uuid

from django.core.exceptions import ValidationError
from django.db import models


class BusinessPartner(models.Model):
    """
    Customer / vendor master record of a business unit.

    RULES:
    - bp_code is unique per business unit
    - POS orders without a customer are attached to the canonical walk-in
      partner (see sales/services/business_partner_service.py)
    """

    TYPE_CUSTOMER = "CUSTOMER"
    TYPE_VENDOR = "VENDOR"

    TYPE_CHOICES = [
        (TYPE_CUSTOMER, "Customer"),
        (TYPE_VENDOR, "Vendor"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    business_unit = models.ForeignKey(
        "business_units.BusinessUnit",
        on_delete=models.PROTECT,
        related_name="business_partners",
    )

    bp_code = models.CharField(max_length=50)
    name = models.CharField(max_length=255)

    bp_type = models.CharField(
        max_length=16,
        choices=TYPE_CHOICES,
        default=TYPE_CUSTOMER,
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["bp_code"]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "bp_code"],
                name="uniq_business_partner_bu_code",
            ),
        ]

    def __str__(self):
        return f"{self.bp_code} | {self.name}"

    def clean(self):
        self.bp_code = (self.bp_code or "").strip()
        self.name = (self.name or "").strip()
        if not self.bp_code:
            raise ValidationError({"bp_code": "bp_code is required"})
        if not self.name:
            raise ValidationError({"name": "name is required"})
