"""
PATH: pos/models/menu.py

MENU MODELS

- MenuItem: sellable POS item (price is the current list price; the
  price actually charged is snapshotted on OrderItem.price_at_sale)
- MenuItemGlMapping: optional per-item revenue / COGS / inventory accounts
- Recipe + RecipeItem: optional bill of materials used for COGS valuation
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class MenuItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    business_unit = models.ForeignKey(
        "business_units.BusinessUnit",
        on_delete=models.PROTECT,
        related_name="menu_items",
    )

    name = models.CharField(max_length=255, db_index=True)

    price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class MenuItemGlMapping(models.Model):
    menu_item = models.OneToOneField(
        MenuItem,
        on_delete=models.CASCADE,
        related_name="gl_mapping",
    )

    sales_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    cogs_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )
    inventory_account = models.ForeignKey(
        "accounting.GlAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        verbose_name = "Menu Item GL Mapping"
        verbose_name_plural = "Menu Item GL Mappings"

    def __str__(self):
        return f"GL mapping – {self.menu_item}"

    @property
    def has_cogs_accounts(self) -> bool:
        return bool(self.cogs_account_id and self.inventory_account_id)


class Recipe(models.Model):
    menu_item = models.OneToOneField(
        MenuItem,
        on_delete=models.CASCADE,
        related_name="recipe",
    )

    name = models.CharField(max_length=255, blank=True, default="")

    def __str__(self):
        return self.name or f"Recipe – {self.menu_item}"


class RecipeItem(models.Model):
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        related_name="recipe_items",
    )

    inventory_item = models.ForeignKey(
        "inventory.InventoryItem",
        on_delete=models.PROTECT,
        related_name="recipe_usages",
    )

    quantity_used = models.DecimalField(
        max_digits=12,
        decimal_places=4,
        help_text="Quantity of the inventory item consumed per menu item sold.",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.inventory_item} x {self.quantity_used}"

    def clean(self):
        if self.quantity_used is not None and self.quantity_used <= 0:
            raise ValidationError({"quantity_used": "quantity_used must be > 0"})
