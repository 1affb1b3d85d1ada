"""
======================================================
PATH: pos/migrations/0001_initial.py
======================================================
MIGRATION: POS DOMAIN

Creates:
- PosConfiguration (one per business unit)
- MenuItem / MenuItemGlMapping / Recipe / RecipeItem
- PaymentMethod / PaymentMethodGlMapping
- Discount
- Order / OrderItem / Payment
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


def _id_field():
    return models.BigAutoField(
        auto_created=True,
        primary_key=True,
        serialize=False,
        verbose_name="ID",
    )


def _uuid_field():
    return models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        primary_key=True,
        serialize=False,
    )


def _money(max_digits=14):
    return models.DecimalField(
        decimal_places=2, default=Decimal("0.00"), max_digits=max_digits
    )


def _optional_account():
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.PROTECT,
        related_name="+",
        to="accounting.glaccount",
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("business_units", "0001_initial"),
        ("accounting", "0001_initial"),
        ("inventory", "0001_initial"),
        ("sales", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PosConfiguration",
            fields=[
                ("id", _id_field()),
                ("auto_post_to_gl", models.BooleanField(default=False)),
                ("auto_create_ar_invoice", models.BooleanField(default=True)),
                (
                    "default_customer_bp_code",
                    models.CharField(
                        blank=True, default="WALK-IN-CUSTOMER", max_length=50
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pos_configuration",
                        to="business_units.businessunit",
                    ),
                ),
                (
                    "ar_invoice_series",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.numberingseries",
                    ),
                ),
                (
                    "journal_entry_series",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.numberingseries",
                    ),
                ),
                (
                    "sales_revenue_account",
                    models.ForeignKey(
                        blank=True,
                        help_text="Default revenue account for menu items without a GL mapping.",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.glaccount",
                    ),
                ),
                ("sales_tax_account", _optional_account()),
                (
                    "cash_account",
                    models.ForeignKey(
                        blank=True,
                        help_text="Default debit account for payment methods without a GL mapping.",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.glaccount",
                    ),
                ),
                ("discount_account", _optional_account()),
            ],
            options={
                "verbose_name": "POS Configuration",
                "verbose_name_plural": "POS Configurations",
            },
        ),
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", _uuid_field()),
                ("name", models.CharField(db_index=True, max_length=255)),
                ("price", _money(max_digits=12)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="menu_items",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="MenuItemGlMapping",
            fields=[
                ("id", _id_field()),
                (
                    "menu_item",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="gl_mapping",
                        to="pos.menuitem",
                    ),
                ),
                ("sales_account", _optional_account()),
                ("cogs_account", _optional_account()),
                ("inventory_account", _optional_account()),
            ],
            options={
                "verbose_name": "Menu Item GL Mapping",
                "verbose_name_plural": "Menu Item GL Mappings",
            },
        ),
        migrations.CreateModel(
            name="Recipe",
            fields=[
                ("id", _id_field()),
                ("name", models.CharField(blank=True, default="", max_length=255)),
                (
                    "menu_item",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recipe",
                        to="pos.menuitem",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="RecipeItem",
            fields=[
                ("id", _id_field()),
                (
                    "quantity_used",
                    models.DecimalField(
                        decimal_places=4,
                        help_text="Quantity of the inventory item consumed per menu item sold.",
                        max_digits=12,
                    ),
                ),
                (
                    "inventory_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="recipe_usages",
                        to="inventory.inventoryitem",
                    ),
                ),
                (
                    "recipe",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="recipe_items",
                        to="pos.recipe",
                    ),
                ),
            ],
            options={"ordering": ["id"]},
        ),
        migrations.CreateModel(
            name="PaymentMethod",
            fields=[
                ("id", _id_field()),
                ("name", models.CharField(max_length=100, unique=True)),
                ("is_active", models.BooleanField(default=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="PaymentMethodGlMapping",
            fields=[
                ("id", _id_field()),
                (
                    "payment_method",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="gl_mappings",
                        to="pos.paymentmethod",
                    ),
                ),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payment_method_gl_mappings",
                        to="business_units.businessunit",
                    ),
                ),
                (
                    "gl_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="+",
                        to="accounting.glaccount",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment Method GL Mapping",
                "verbose_name_plural": "Payment Method GL Mappings",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("payment_method", "business_unit"),
                        name="uniq_payment_method_gl_mapping_bu",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Discount",
            fields=[
                ("id", _id_field()),
                ("name", models.CharField(max_length=100)),
                ("discount_value", _money(max_digits=12)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="discounts",
                        to="business_units.businessunit",
                    ),
                ),
                ("gl_account", _optional_account()),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", _uuid_field()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("OPEN", "Open"),
                            ("PREPARING", "Preparing"),
                            ("PAID", "Paid"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="OPEN",
                        max_length=16,
                    ),
                ),
                ("is_paid", models.BooleanField(default=False)),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("subtotal", _money()),
                ("tax", _money()),
                ("discount_value", _money()),
                ("total_amount", _money()),
                ("amount_paid", _money()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_orders",
                        to="business_units.businessunit",
                    ),
                ),
                (
                    "business_partner",
                    models.ForeignKey(
                        blank=True,
                        help_text="Customer. Walk-in customer is attached on completion when empty.",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_orders",
                        to="sales.businesspartner",
                    ),
                ),
                (
                    "discount",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="pos.discount",
                    ),
                ),
                (
                    "ar_invoice",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_order",
                        to="sales.arinvoice",
                    ),
                ),
                (
                    "journal_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pos_order",
                        to="accounting.journalentry",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        help_text="Cashier / staff who processed the order",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="pos_orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["created_at"], name="pos_order_created_5a7e31_idx"
                    ),
                    models.Index(
                        fields=["business_unit", "status"],
                        name="pos_order_busines_c2d940_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", _id_field()),
                ("quantity", models.PositiveIntegerField(default=1)),
                (
                    "price_at_sale",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Unit price snapshotted when the item was rung up.",
                        max_digits=12,
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="pos.order",
                    ),
                ),
                (
                    "menu_item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="order_items",
                        to="pos.menuitem",
                    ),
                ),
            ],
            options={"ordering": ["id"]},
        ),
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", _id_field()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                (
                    "reference",
                    models.CharField(blank=True, default="", max_length=128),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="payments",
                        to="pos.order",
                    ),
                ),
                (
                    "payment_method",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="pos.paymentmethod",
                    ),
                ),
            ],
            options={"ordering": ["id"]},
        ),
    ]
