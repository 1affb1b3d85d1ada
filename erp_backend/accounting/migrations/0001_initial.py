"""
======================================================
PATH: accounting/migrations/0001_initial.py
======================================================
MIGRATION: GENERAL LEDGER CORE

Creates:
- GlAccount
- NumberingSeries
- AccountingPeriod
- JournalEntry / JournalEntryLine (immutable)
"""

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("business_units", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="GlAccount",
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
                ("account_code", models.CharField(max_length=20)),
                ("name", models.CharField(max_length=150)),
                (
                    "account_type",
                    models.CharField(
                        choices=[
                            ("ASSET", "Asset"),
                            ("LIABILITY", "Liability"),
                            ("EQUITY", "Equity"),
                            ("REVENUE", "Revenue"),
                            ("EXPENSE", "Expense"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "normal_balance",
                    models.CharField(
                        blank=True,
                        choices=[("DEBIT", "Debit"), ("CREDIT", "Credit")],
                        max_length=6,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="gl_accounts",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={
                "verbose_name": "GL Account",
                "verbose_name_plural": "GL Accounts",
                "ordering": ["account_code"],
                "indexes": [
                    models.Index(
                        fields=["business_unit", "account_code"],
                        name="accounting__busines_6f1c2a_idx",
                    ),
                    models.Index(
                        fields=["business_unit", "account_type"],
                        name="accounting__busines_8d3e4b_idx",
                    ),
                    models.Index(
                        fields=["is_active"], name="accounting__is_acti_a21f9c_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "account_code"),
                        name="uniq_gl_account_bu_code",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("account_code", ""), _negated=True),
                        name="chk_gl_account_code_not_blank",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("name", ""), _negated=True),
                        name="chk_gl_account_name_not_blank",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="NumberingSeries",
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
                ("name", models.CharField(max_length=100)),
                (
                    "document_type",
                    models.CharField(
                        choices=[
                            ("SALES_ORDER", "Sales Order"),
                            ("DELIVERY", "Delivery"),
                            ("AR_INVOICE", "A/R Invoice"),
                            ("PURCHASE_REQUEST", "Purchase Request"),
                            ("PURCHASE_ORDER", "Purchase Order"),
                            ("GOODS_RECEIPT_PO", "Goods Receipt PO"),
                            ("AP_INVOICE", "A/P Invoice"),
                            ("JOURNAL_ENTRY", "Journal Entry"),
                            ("INCOMING_PAYMENT", "Incoming Payment"),
                            ("OUTGOING_PAYMENT", "Outgoing Payment"),
                        ],
                        max_length=32,
                    ),
                ),
                ("prefix", models.CharField(blank=True, default="", max_length=20)),
                ("next_number", models.PositiveIntegerField(default=1)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="numbering_series",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={
                "verbose_name": "Numbering Series",
                "verbose_name_plural": "Numbering Series",
                "ordering": ["business_unit", "document_type", "name"],
                "indexes": [
                    models.Index(
                        fields=["business_unit", "document_type"],
                        name="accounting__busines_3b7d10_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "name"),
                        name="uniq_numbering_series_bu_name",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("next_number__gte", 1)),
                        name="chk_numbering_series_next_number_gte_1",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AccountingPeriod",
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
                ("name", models.CharField(max_length=100)),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[("OPEN", "Open"), ("CLOSED", "Closed")],
                        default="OPEN",
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accounting_periods",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={
                "verbose_name": "Accounting Period",
                "verbose_name_plural": "Accounting Periods",
                "ordering": ["-start_date"],
                "indexes": [
                    models.Index(
                        fields=["business_unit", "status"],
                        name="accounting__busines_5c90e2_idx",
                    ),
                    models.Index(
                        fields=["business_unit", "start_date", "end_date"],
                        name="accounting__busines_e4a871_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "start_date", "end_date"),
                        name="uniq_accounting_period_bu_start_end",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("end_date__gte", models.F("start_date"))
                        ),
                        name="chk_accounting_period_end_gte_start",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
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
                (
                    "doc_num",
                    models.CharField(
                        help_text="Document number allocated from the journal entry numbering series",
                        max_length=40,
                    ),
                ),
                (
                    "posting_date",
                    models.DateField(
                        default=django.utils.timezone.localdate,
                        help_text="Accounting effective date",
                    ),
                ),
                ("remarks", models.TextField(blank=True, default="")),
                (
                    "is_posted",
                    models.BooleanField(
                        default=True,
                        help_text="Once posted, journal entries are immutable",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="Timestamp when the journal entry was created",
                    ),
                ),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="journal_entries",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "business_unit",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_entries",
                        to="business_units.businessunit",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry",
                "verbose_name_plural": "Journal Entries",
                "ordering": ["-posting_date", "-created_at"],
                "indexes": [
                    models.Index(
                        fields=["posting_date"], name="accounting__posting_0d6a33_idx"
                    ),
                    models.Index(
                        fields=["created_at"], name="accounting__created_91b2f7_idx"
                    ),
                    models.Index(
                        fields=["is_posted"], name="accounting__is_post_47ce05_idx"
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("business_unit", "doc_num"),
                        name="uniq_journal_entry_bu_doc_num",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntryLine",
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
                (
                    "debit",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=14, null=True
                    ),
                ),
                (
                    "credit",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=14, null=True
                    ),
                ),
                (
                    "description",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "gl_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="journal_lines",
                        to="accounting.glaccount",
                    ),
                ),
                (
                    "journal_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="lines",
                        to="accounting.journalentry",
                    ),
                ),
            ],
            options={
                "verbose_name": "Journal Entry Line",
                "verbose_name_plural": "Journal Entry Lines",
                "ordering": ["journal_entry", "line_no"],
                "indexes": [
                    models.Index(
                        fields=["gl_account"], name="accounting__gl_acco_7e5f21_idx"
                    ),
                    models.Index(
                        fields=["journal_entry", "line_no"],
                        name="accounting__journal_c38b96_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("journal_entry", "line_no"),
                        name="uniq_journal_line_entry_line_no",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("credit__isnull", True),
                                ("debit__gt", 0),
                                ("debit__isnull", False),
                            ),
                            models.Q(
                                ("credit__gt", 0),
                                ("credit__isnull", False),
                                ("debit__isnull", True),
                            ),
                            _connector="OR",
                        ),
                        name="chk_journal_line_debit_xor_credit",
                    ),
                ],
            },
        ),
    ]
