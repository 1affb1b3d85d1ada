# pos/models/__init__.py

"""
POS MODELS PACKAGE EXPORTS
"""

from pos.models.configuration import DEFAULT_WALK_IN_BP_CODE, PosConfiguration
from pos.models.discount import Discount
from pos.models.menu import MenuItem, MenuItemGlMapping, Recipe, RecipeItem
from pos.models.order import Order, OrderItem, Payment
from pos.models.payment_method import PaymentMethod, PaymentMethodGlMapping

__all__ = [
    "DEFAULT_WALK_IN_BP_CODE",
    "PosConfiguration",
    "MenuItem",
    "MenuItemGlMapping",
    "Recipe",
    "RecipeItem",
    "PaymentMethod",
    "PaymentMethodGlMapping",
    "Discount",
    "Order",
    "OrderItem",
    "Payment",
]
