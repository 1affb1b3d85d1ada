# pos/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

User = settings.AUTH_USER_MODEL


class Order(models.Model):
    """
    Represents a point-of-sale order (tab / ticket).

    GUARANTEES:
    - Financial fields are immutable once PAID
    - PAID and CANCELLED are terminal (see pos/services/order_lifecycle.py)
    - ar_invoice / journal_entry are one-to-one: an order is posted at most once

    POSTING LINKS:
    - journal_entry is the GL posting of this order
    - ar_invoice is the (optional) A/R invoice created alongside it
    """

    STATUS_OPEN = "OPEN"
    STATUS_PREPARING = "PREPARING"
    STATUS_PAID = "PAID"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = [
        (STATUS_OPEN, "Open"),
        (STATUS_PREPARING, "Preparing"),
        (STATUS_PAID, "Paid"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    business_unit = models.ForeignKey(
        "business_units.BusinessUnit",
        on_delete=models.PROTECT,
        related_name="pos_orders",
    )

    status = models.CharField(
        max_length=16,
        choices=STATUS_CHOICES,
        default=STATUS_OPEN,
    )

    is_paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)

    subtotal = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    tax = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    discount_value = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    amount_paid = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    business_partner = models.ForeignKey(
        "sales.BusinessPartner",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="pos_orders",
        help_text="Customer. Walk-in customer is attached on completion when empty.",
    )

    discount = models.ForeignKey(
        "pos.Discount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )

    ar_invoice = models.OneToOneField(
        "sales.ARInvoice",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="pos_order",
    )

    journal_entry = models.OneToOneField(
        "accounting.JournalEntry",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="pos_order",
    )

    user = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="pos_orders",
        help_text="Cashier / staff who processed the order",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="pos_order_created_5a7e31_idx"),
            models.Index(
                fields=["business_unit", "status"], name="pos_order_busines_c2d940_idx"
            ),
        ]

    _IMMUTABLE_FIELDS_AFTER_PAID = (
        "business_unit_id",
        "subtotal",
        "tax",
        "discount_value",
        "total_amount",
        "amount_paid",
        "paid_at",
        "discount_id",
    )

    @property
    def is_posted(self) -> bool:
        return bool(self.journal_entry_id)

    def _validate_immutable(self, previous: "Order"):
        if previous.status != self.STATUS_PAID:
            return

        if self.status != previous.status:
            raise ValidationError(
                f"Order is immutable once {previous.status}. "
                f"Status change {previous.status} -> {self.status} is not allowed."
            )

        for field in self._IMMUTABLE_FIELDS_AFTER_PAID:
            if getattr(self, field) != getattr(previous, field):
                raise ValidationError(
                    f"Order is immutable once {previous.status}. "
                    f"Field '{field}' cannot be changed."
                )

    def save(self, *args, **kwargs):
        if self.pk and not self._state.adding:
            previous = Order.objects.filter(pk=self.pk).first()
            if previous is not None:
                self._validate_immutable(previous)

        super().save(*args, **kwargs)

    def __str__(self):
        return f"Order {self.id} | {self.status} | {self.total_amount}"


class OrderItem(models.Model):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )

    menu_item = models.ForeignKey(
        "pos.MenuItem",
        on_delete=models.PROTECT,
        related_name="order_items",
    )

    quantity = models.PositiveIntegerField(default=1)

    price_at_sale = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Unit price snapshotted when the item was rung up.",
    )

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.menu_item} x {self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.quantity) * Decimal(self.price_at_sale)


class Payment(models.Model):
    """
    Tender recorded against an order.

    RULES:
    - Sum(amount) must equal order.total_amount (within 0.01) before the order
      can be completed (enforced in pos/services/order_completion.py).
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="payments",
    )

    payment_method = models.ForeignKey(
        "pos.PaymentMethod",
        on_delete=models.PROTECT,
        related_name="payments",
    )

    amount = models.DecimalField(max_digits=14, decimal_places=2)

    reference = models.CharField(max_length=128, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.order_id} | {self.payment_method} | {self.amount}"
