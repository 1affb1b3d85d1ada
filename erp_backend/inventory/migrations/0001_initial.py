import uuid

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("business_units", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("item_code", models.CharField(db_index=True, max_length=64)),
                ("name", models.CharField(db_index=True, max_length=255)),
                (
                    "unit_of_measure",
                    models.CharField(blank=True, default="", max_length=20),
                ),
                (
                    "standard_cost",
                    models.DecimalField(
                        blank=True,
                        decimal_places=4,
                        help_text="Cost per unit of measure used for COGS valuation.",
                        max_digits=14,
                        null=True,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="inventory_items",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "item_code"),
                        name="uniq_inventory_item_bu_code",
                    )
                ],
            },
        ),
    ]
