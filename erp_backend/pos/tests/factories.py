# pos/tests/factories.py

"""
Test seeding helpers shared by the accounting + POS test suites.

`build_ledger_setup()` seeds one business unit that can post:
- GL accounts (cash, card clearing, revenue, tax, discount, COGS, inventory)
- AR + JE numbering series
- an OPEN accounting period covering today
- POS configuration with auto_post_to_gl on
- a cash payment method mapped to cash, a card method mapped to card clearing
- two menu items with sales mappings (the burger also carries COGS + a recipe)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from accounting.models import AccountingPeriod, GlAccount, NumberingSeries
from business_units.models import BusinessUnit
from inventory.models import InventoryItem
from pos.models import (
    MenuItem,
    MenuItemGlMapping,
    Order,
    OrderItem,
    Payment,
    PaymentMethod,
    PaymentMethodGlMapping,
    PosConfiguration,
    Recipe,
    RecipeItem,
)


@dataclass
class LedgerSetup:
    business_unit: BusinessUnit
    config: PosConfiguration
    accounts: dict = field(default_factory=dict)
    ar_series: NumberingSeries | None = None
    je_series: NumberingSeries | None = None
    period: AccountingPeriod | None = None
    cash: PaymentMethod | None = None
    card: PaymentMethod | None = None
    burger: MenuItem | None = None
    soda: MenuItem | None = None


def make_business_unit(code: str = "MAIN", name: str = "Main Outlet") -> BusinessUnit:
    return BusinessUnit.objects.create(code=code, name=name)


def make_account(business_unit, code: str, name: str, account_type: str) -> GlAccount:
    return GlAccount.objects.create(
        business_unit=business_unit,
        account_code=code,
        name=name,
        account_type=account_type,
    )


def make_series(business_unit, *, document_type, prefix: str, next_number: int = 1) -> NumberingSeries:
    return NumberingSeries.objects.create(
        business_unit=business_unit,
        name=f"{document_type} {prefix}",
        document_type=document_type,
        prefix=prefix,
        next_number=next_number,
    )


def make_open_period(business_unit, *, status=AccountingPeriod.Status.OPEN) -> AccountingPeriod:
    today = timezone.localdate()
    return AccountingPeriod.objects.create(
        business_unit=business_unit,
        name=f"{today:%Y-%m}",
        start_date=today - timedelta(days=15),
        end_date=today + timedelta(days=15),
        status=status,
    )


def build_ledger_setup(code: str = "MAIN", *, with_cogs: bool = True) -> LedgerSetup:
    bu = make_business_unit(code=code, name=f"Outlet {code}")

    accounts = {
        "cash": make_account(bu, "1000", "Cash", GlAccount.ASSET),
        "card": make_account(bu, "1010", "Card Clearing", GlAccount.ASSET),
        "inventory": make_account(bu, "1200", "Inventory", GlAccount.ASSET),
        "tax": make_account(bu, "2100", "Sales Tax Payable", GlAccount.LIABILITY),
        "revenue": make_account(bu, "4000", "Sales Revenue", GlAccount.REVENUE),
        "drinks": make_account(bu, "4010", "Beverage Revenue", GlAccount.REVENUE),
        "discount": make_account(bu, "4050", "Sales Discounts", GlAccount.REVENUE),
        "cogs": make_account(bu, "5000", "Cost of Goods Sold", GlAccount.EXPENSE),
    }

    ar_series = make_series(bu, document_type=NumberingSeries.DocumentType.AR_INVOICE, prefix=f"AR-{code}-")
    je_series = make_series(bu, document_type=NumberingSeries.DocumentType.JOURNAL_ENTRY, prefix=f"JE-{code}-")
    period = make_open_period(bu)

    config = PosConfiguration.objects.create(
        business_unit=bu,
        auto_post_to_gl=True,
        auto_create_ar_invoice=True,
        ar_invoice_series=ar_series,
        journal_entry_series=je_series,
        sales_revenue_account=accounts["revenue"],
        sales_tax_account=accounts["tax"],
        cash_account=accounts["cash"],
        discount_account=accounts["discount"],
    )

    cash, _ = PaymentMethod.objects.get_or_create(name="Cash")
    card, _ = PaymentMethod.objects.get_or_create(name="Card")
    PaymentMethodGlMapping.objects.create(payment_method=cash, business_unit=bu, gl_account=accounts["cash"])
    PaymentMethodGlMapping.objects.create(payment_method=card, business_unit=bu, gl_account=accounts["card"])

    burger = MenuItem.objects.create(business_unit=bu, name="Burger", price=Decimal("10.00"))
    soda = MenuItem.objects.create(business_unit=bu, name="Soda", price=Decimal("2.50"))

    MenuItemGlMapping.objects.create(
        menu_item=burger,
        sales_account=accounts["revenue"],
        cogs_account=accounts["cogs"] if with_cogs else None,
        inventory_account=accounts["inventory"] if with_cogs else None,
    )
    MenuItemGlMapping.objects.create(menu_item=soda, sales_account=accounts["drinks"])

    if with_cogs:
        bun = InventoryItem.objects.create(
            business_unit=bu, item_code="BUN", name="Bun", standard_cost=Decimal("0.5000")
        )
        patty = InventoryItem.objects.create(
            business_unit=bu, item_code="PATTY", name="Patty", standard_cost=Decimal("2.2500")
        )
        recipe = Recipe.objects.create(menu_item=burger, name="Burger")
        RecipeItem.objects.create(recipe=recipe, inventory_item=bun, quantity_used=Decimal("1"))
        RecipeItem.objects.create(recipe=recipe, inventory_item=patty, quantity_used=Decimal("1"))

    return LedgerSetup(
        business_unit=bu,
        config=config,
        accounts=accounts,
        ar_series=ar_series,
        je_series=je_series,
        period=period,
        cash=cash,
        card=card,
        burger=burger,
        soda=soda,
    )


def make_order(
    business_unit,
    *,
    items=(),
    payments=(),
    tax=Decimal("0.00"),
    discount_value=Decimal("0.00"),
    discount=None,
    status=Order.STATUS_OPEN,
    total_amount=None,
    user=None,
    business_partner=None,
) -> Order:
    """
    items:    [(menu_item, quantity, price_at_sale), ...]
    payments: [(payment_method, amount), ...]
    total_amount defaults to subtotal + tax - discount_value.
    """
    subtotal = sum(
        (Decimal(qty) * Decimal(price) for _, qty, price in items),
        Decimal("0.00"),
    )
    tax = Decimal(tax)
    discount_value = Decimal(discount_value)
    if total_amount is None:
        total_amount = subtotal + tax - discount_value

    is_paid = status == Order.STATUS_PAID
    order = Order.objects.create(
        business_unit=business_unit,
        status=status,
        is_paid=is_paid,
        paid_at=timezone.now() if is_paid else None,
        subtotal=subtotal,
        tax=tax,
        discount_value=discount_value,
        discount=discount,
        total_amount=Decimal(total_amount),
        amount_paid=Decimal(total_amount) if is_paid else Decimal("0.00"),
        user=user,
        business_partner=business_partner,
    )

    for menu_item, qty, price in items:
        OrderItem.objects.create(order=order, menu_item=menu_item, quantity=qty, price_at_sale=Decimal(price))

    for method, amount in payments:
        Payment.objects.create(order=order, payment_method=method, amount=Decimal(amount))

    return order
