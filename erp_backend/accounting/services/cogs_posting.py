# accounting/services/cogs_posting.py

"""
POSTING RULES: COST OF GOODS SOLD (COGS)

Derives COGS for a POS order from recipe bill-of-materials and inventory
standard costs, and appends it to the order's journal entry.

Accounting rule (per order item):
- Debit  COGS account        "COGS - <menu item>"
- Credit Inventory account   "Inventory Depletion - <menu item>"

Skip rule:
- An item whose menu item has no recipe, or lacks a COGS + inventory GL
  mapping, recognizes no COGS. This is silent, not an error.

This module:
- DOES NOT touch inventory quantities
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from accounting.services.account_resolver import get_cogs_accounts, related_or_none
from accounting.services.journal_entry_service import append_journal_lines

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(value) -> Decimal:
    return Decimal(value).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ItemCogs:
    menu_item_name: str
    cogs_account: object
    inventory_account: object
    amount: Decimal


def compute_item_cogs(order_item) -> ItemCogs | None:
    """
    COGS of one order item, or None when the item is skipped.

    amount = sum(recipe_item.quantity_used * order_item.quantity * standard_cost)
    """
    menu_item = order_item.menu_item

    recipe = related_or_none(menu_item, "recipe")
    if recipe is None:
        return None

    accounts = get_cogs_accounts(menu_item=menu_item)
    if accounts is None:
        return None

    quantity = Decimal(order_item.quantity)
    total = Decimal("0")
    for recipe_item in recipe.recipe_items.all():
        total += (
            Decimal(recipe_item.quantity_used)
            * quantity
            * recipe_item.inventory_item.cost_or_zero
        )

    cogs_account, inventory_account = accounts
    return ItemCogs(
        menu_item_name=menu_item.name,
        cogs_account=cogs_account,
        inventory_account=inventory_account,
        amount=_money(total),
    )


def build_cogs_postings(order) -> list[dict]:
    lines: list[dict] = []

    for order_item in order.items.all():
        item_cogs = compute_item_cogs(order_item)
        if item_cogs is None or item_cogs.amount <= 0:
            continue

        lines.append(
            {
                "account": item_cogs.cogs_account,
                "debit": item_cogs.amount,
                "credit": None,
                "description": f"COGS - {item_cogs.menu_item_name}",
            }
        )
        lines.append(
            {
                "account": item_cogs.inventory_account,
                "debit": None,
                "credit": item_cogs.amount,
                "description": f"Inventory Depletion - {item_cogs.menu_item_name}",
            }
        )

    return lines


def post_order_cogs(*, journal_entry, order) -> Decimal:
    """
    Append COGS lines for the order to journal_entry. Returns total COGS.
    """
    lines = build_cogs_postings(order)
    if not lines:
        return Decimal("0.00")

    append_journal_lines(journal_entry=journal_entry, lines=lines)

    total = sum((line["debit"] for line in lines if line["debit"]), Decimal("0.00"))
    logger.info(
        "COGS posted",
        extra={
            "journal_entry_id": str(journal_entry.id),
            "order_id": str(order.id),
            "cogs_total": str(total),
        },
    )
    return total
