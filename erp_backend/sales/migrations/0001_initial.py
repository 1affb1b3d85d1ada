"""
======================================================
PATH: sales/migrations/0001_initial.py
======================================================
MIGRATION: BUSINESS PARTNERS + A/R INVOICES
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("business_units", "0001_initial"),
        ("accounting", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="BusinessPartner",
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
                ("bp_code", models.CharField(max_length=50)),
                ("name", models.CharField(max_length=255)),
                (
                    "bp_type",
                    models.CharField(
                        choices=[("CUSTOMER", "Customer"), ("VENDOR", "Vendor")],
                        default="CUSTOMER",
                        max_length=16,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="business_partners",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={
                "ordering": ["bp_code"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "bp_code"),
                        name="uniq_business_partner_bu_code",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ARInvoice",
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
                ("doc_num", models.CharField(max_length=40)),
                (
                    "posting_date",
                    models.DateField(default=django.utils.timezone.localdate),
                ),
                ("due_date", models.DateField(default=django.utils.timezone.localdate)),
                (
                    "document_date",
                    models.DateField(default=django.utils.timezone.localdate),
                ),
                (
                    "total_amount",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "amount_paid",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("OPEN", "Open"),
                            ("CLOSED", "Closed"),
                            ("CANCELLED", "Cancelled"),
                        ],
                        default="OPEN",
                        max_length=16,
                    ),
                ),
                (
                    "settlement_status",
                    models.CharField(
                        choices=[
                            ("UNSETTLED", "Unsettled"),
                            ("PARTIALLY_SETTLED", "Partially settled"),
                            ("SETTLED", "Settled"),
                        ],
                        default="UNSETTLED",
                        max_length=20,
                    ),
                ),
                ("remarks", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "business_partner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ar_invoices",
                        to="sales.businesspartner",
                    ),
                ),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ar_invoices",
                        to="business_units.businessunit",
                    ),
                ),
                (
                    "journal_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ar_invoice",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "A/R Invoice",
                "verbose_name_plural": "A/R Invoices",
                "ordering": ["-posting_date", "-created_at"],
                "indexes": [
                    models.Index(
                        fields=["posting_date"], name="sales_arinv_posting_4b1e2d_idx"
                    ),
                    models.Index(fields=["status"], name="sales_arinv_status_9c0f13_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "doc_num"),
                        name="uniq_ar_invoice_bu_doc_num",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ARInvoiceLine",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("line_no", models.PositiveIntegerField()),
                ("description", models.CharField(max_length=255)),
                (
                    "quantity",
                    models.DecimalField(
                        decimal_places=3, default=Decimal("1"), max_digits=12
                    ),
                ),
                (
                    "unit_price",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "line_total",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=14
                    ),
                ),
                (
                    "gl_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ar_invoice_lines",
                        to="accounting.glaccount",
                    ),
                ),
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="sales.arinvoice",
                    ),
                ),
            ],
            options={
                "ordering": ["invoice", "line_no"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("invoice", "line_no"),
                        name="uniq_ar_invoice_line_invoice_line_no",
                    )
                ],
            },
        ),
    ]
