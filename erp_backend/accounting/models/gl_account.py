# accounting/models/gl_account.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from business_units.models import BusinessUnit


class GlAccount(models.Model):
    """
    Represents a single general-ledger account of a business unit.

    Guarantees:
    - Account codes are unique per business unit
    - Code + name are normalized (trimmed)
    - normal_balance is derived from account_type when left blank
    - Referenced by postings, never mutated by them
    """

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"

    ACCOUNT_TYPES = [
        (ASSET, "Asset"),
        (LIABILITY, "Liability"),
        (EQUITY, "Equity"),
        (REVENUE, "Revenue"),
        (EXPENSE, "Expense"),
    ]

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    NORMAL_BALANCES = [
        (DEBIT, "Debit"),
        (CREDIT, "Credit"),
    ]

    DEBIT_NATURE_TYPES = (ASSET, EXPENSE)

    business_unit = models.ForeignKey(
        BusinessUnit,
        on_delete=models.PROTECT,
        related_name="gl_accounts",
    )

    account_code = models.CharField(max_length=20)
    name = models.CharField(max_length=150)

    account_type = models.CharField(
        max_length=20,
        choices=ACCOUNT_TYPES,
    )

    normal_balance = models.CharField(
        max_length=6,
        choices=NORMAL_BALANCES,
        blank=True,
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["account_code"]
        verbose_name = "GL Account"
        verbose_name_plural = "GL Accounts"
        indexes = [
            models.Index(fields=["business_unit", "account_code"], name="accounting__busines_6f1c2a_idx"),
            models.Index(fields=["business_unit", "account_type"], name="accounting__busines_8d3e4b_idx"),
            models.Index(fields=["is_active"], name="accounting__is_acti_a21f9c_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["business_unit", "account_code"],
                name="uniq_gl_account_bu_code",
            ),
            models.CheckConstraint(
                condition=~Q(account_code=""),
                name="chk_gl_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_gl_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.account_code} – {self.name}"

    @classmethod
    def default_normal_balance(cls, account_type: str) -> str:
        return cls.DEBIT if account_type in cls.DEBIT_NATURE_TYPES else cls.CREDIT

    def clean(self):
        self.account_code = (self.account_code or "").strip()
        self.name = (self.name or "").strip()

        if not self.account_code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")

        if not self.normal_balance and self.account_type:
            self.normal_balance = self.default_normal_balance(self.account_type)

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)
