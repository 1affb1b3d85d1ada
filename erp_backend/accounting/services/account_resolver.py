# accounting/services/account_resolver.py

"""
PATH: accounting/services/account_resolver.py

ACCOUNT RESOLVER (AUTHORITATIVE)

This module answers ONE question:
"Which GL account should be used for this posting line?"

Every POS line resolves the same way:
    primary mapping (menu item / payment method / discount)
        ?? business unit default (PosConfiguration)
        ?? hard-fail with a message naming the offending item

Design goals:
- deterministic
- business-unit safe (mappings are looked up per business unit)
- hard-fail on missing setup (so we don't post to wrong accounts)
"""

from __future__ import annotations

import logging

from django.core.exceptions import ObjectDoesNotExist

from accounting.services.exceptions import (
    AccountingServiceError,
    ConfigurationError,
    MissingGLMappingError,
)

logger = logging.getLogger(__name__)


def related_or_none(obj, attr: str):
    """
    Reverse one-to-one access without the DoesNotExist dance
    (menu_item.gl_mapping, menu_item.recipe, ...).
    """
    if obj is None:
        return None
    try:
        return getattr(obj, attr)
    except ObjectDoesNotExist:
        return None


def resolve_account(
    primary,
    fallback=None,
    *,
    message: str,
    error_cls: type[AccountingServiceError] = MissingGLMappingError,
):
    """
    Return primary if set, else fallback, else raise error_cls(message).
    """
    account = primary if primary is not None else fallback
    if account is None:
        raise error_cls(message)
    return account


# ------------------------------------------------------------
# SEMANTIC RESOLVERS
# ------------------------------------------------------------


def get_sales_account(*, menu_item, config):
    mapping = related_or_none(menu_item, "gl_mapping")
    primary = mapping.sales_account if mapping is not None else None

    if primary is None and config.sales_revenue_account is not None:
        logger.debug(
            "Menu item has no sales mapping; using default revenue account",
            extra={"menu_item_id": str(menu_item.id)},
        )

    return resolve_account(
        primary,
        config.sales_revenue_account,
        message=f"Sales account not found for menu item: {menu_item.name}",
    )


def get_payment_account(*, payment_method, config, mapped_accounts: dict):
    """
    mapped_accounts: {payment_method_id: GlAccount} for the order's business unit.
    """
    return resolve_account(
        mapped_accounts.get(payment_method.id),
        config.cash_account,
        message=f"GL Account mapping not found for payment method: {payment_method.name}",
    )


def get_discount_account(*, discount, config):
    primary = discount.gl_account if discount is not None else None
    return resolve_account(
        primary,
        config.discount_account,
        message="Discount GL account is not configured.",
        error_cls=ConfigurationError,
    )


def get_cogs_accounts(*, menu_item):
    """
    (cogs_account, inventory_account) or None when the item is not COGS-mapped.
    """
    mapping = related_or_none(menu_item, "gl_mapping")
    if mapping is None or not mapping.has_cogs_accounts:
        return None
    return mapping.cogs_account, mapping.inventory_account
