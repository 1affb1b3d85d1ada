# inventory/models/inventory_item.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from business_units.models import BusinessUnit


class InventoryItem(models.Model):
    """
    Represents a stocked ingredient / component consumed by recipes.

    COST MODEL (IMPORTANT):
    - standard_cost is the valuation used for COGS on POS posting
    - a missing standard_cost is valued at 0 (no COGS recognized)
    - stock quantities are NOT tracked here
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    business_unit = models.ForeignKey(
        BusinessUnit,
        on_delete=models.CASCADE,
        related_name="inventory_items",
    )

    item_code = models.CharField(max_length=64, db_index=True)
    name = models.CharField(max_length=255, db_index=True)

    unit_of_measure = models.CharField(max_length=20, blank=True, default="")

    standard_cost = models.DecimalField(
        max_digits=14,
        decimal_places=4,
        null=True,
        blank=True,
        help_text="Cost per unit of measure used for COGS valuation.",
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "item_code"],
                name="uniq_inventory_item_bu_code",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.item_code})"

    @property
    def cost_or_zero(self) -> Decimal:
        return self.standard_cost if self.standard_cost is not None else Decimal("0")

    def clean(self):
        if self.standard_cost is not None and self.standard_cost < 0:
            raise ValidationError({"standard_cost": "standard_cost cannot be negative"})
